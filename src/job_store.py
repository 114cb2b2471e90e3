import logging
from typing import Callable

from src.constants import DEFAULT_JOB_TTL_SECONDS, MSG_SWEEP
from src.models import AnalysisJob, now_ms

logger = logging.getLogger(__name__)


class JobStore:
    """Process-local job map. Nothing is persisted; a restart forgets every job."""

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_JOB_TTL_SECONDS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._ttl_ms = ttl_seconds * 1000
        self._clock = clock
        self._jobs: dict[str, AnalysisJob] = {}

    def now(self) -> int:
        return self._clock()

    def create(self, job_id: str) -> AnalysisJob:
        stamp = self._clock()
        job = AnalysisJob(id=job_id, created_at=stamp, updated_at=stamp)
        self._jobs[job_id] = job
        return job

    def get(self, job_id: str) -> AnalysisJob | None:
        return self._jobs.get(job_id)

    def set(self, job_id: str, job: AnalysisJob) -> None:
        self._jobs[job_id] = job

    def delete(self, job_id: str) -> None:
        self._jobs.pop(job_id, None)

    def is_expired(self, job: AnalysisJob) -> bool:
        return self._clock() - job.created_at > self._ttl_ms

    def sweep(self) -> int:
        expired = [jid for jid, job in self._jobs.items() if self.is_expired(job)]
        list(map(self.delete, expired))
        match len(expired):
            case 0:
                pass
            case n:
                logger.info(MSG_SWEEP, n)
        return len(expired)

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs
