"""JobAPI — the two-operation contract (start, status) for external callers."""
import asyncio
import logging
from typing import Any

from src.constants import MSG_JOB_CREATED, MSG_JOB_EVICTED, MSG_SHUTDOWN_CANCEL
from src.job_store import JobStore
from src.models import NOT_FOUND_STATUS, AnalysisRequest, new_job_id
from src.orchestrator import AnalysisOrchestrator
from src.validation import ResultSchema

logger = logging.getLogger(__name__)


class JobAPI:

    def __init__(self, store: JobStore, orchestrator: AnalysisOrchestrator) -> None:
        self._store = store
        self._orchestrator = orchestrator
        self._tasks: set[asyncio.Task] = set()

    async def start(self, request: AnalysisRequest) -> dict[str, str]:
        """Create a pending job and schedule its analysis without waiting for it."""
        job_id = new_job_id(self._store.now())
        while job_id in self._store:
            job_id = new_job_id(self._store.now())
        self._store.create(job_id)
        schema = ResultSchema.for_category(request.category)
        logger.info(MSG_JOB_CREATED, job_id, request.category, len(request.images))

        task = asyncio.create_task(self._orchestrator.run(job_id, request, schema))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return {"jobId": job_id}

    def status(self, job_id: str) -> dict[str, Any]:
        """Current status; unknown or expired ids read as ``failed``/``not_found``."""
        job = self._store.get(job_id)
        match job:
            case None:
                return dict(NOT_FOUND_STATUS)
            case j if self._store.is_expired(j):
                self._store.delete(job_id)
                logger.info(MSG_JOB_EVICTED, job_id)
                return dict(NOT_FOUND_STATUS)
            case j:
                return j.to_status()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait for every in-flight job to reach a terminal state."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def close(self) -> None:
        match len(self._tasks):
            case 0:
                return
            case n:
                logger.info(MSG_SHUTDOWN_CANCEL, n)
        tasks = list(self._tasks)
        list(map(lambda t: t.cancel(), tasks))
        await asyncio.gather(*tasks, return_exceptions=True)
