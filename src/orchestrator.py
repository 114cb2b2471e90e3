"""AnalysisOrchestrator — drives one job from pending to a terminal state."""
import logging
import time
from dataclasses import replace
from typing import Any, NamedTuple

from src.constants import (
    ERR_SCHEMA_VALIDATION,
    MSG_JOB_CRASHED,
    MSG_JOB_FAILED,
    MSG_JOB_GONE,
    MSG_JOB_PROCESSING,
    MSG_JOB_RETRY,
    MSG_JOB_SUCCEEDED,
    MSG_JOB_TERMINAL,
)
from src.gateway.client import GatewayError, ModelGateway
from src.job_store import JobStore
from src.models import AnalysisRequest, JobStatus
from src.validation import ResultSchema

logger = logging.getLogger(__name__)


class Attempt(NamedTuple):
    result: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def failure_reason(exc: Exception) -> str:
    """Gateway failures carry their own reason; anything else passes through verbatim."""
    match exc:
        case GatewayError():
            return exc.reason
        case _:
            return str(exc) or type(exc).__name__


class AnalysisOrchestrator:
    """Runs the call → validate → (strict retry) → finalize sequence for a job."""

    def __init__(self, store: JobStore, gateway: ModelGateway) -> None:
        self._store = store
        self._gateway = gateway

    async def run(self, job_id: str, request: AnalysisRequest, schema: ResultSchema) -> None:
        """Never raises: every failure ends as a ``failed`` job."""
        started = time.monotonic()
        try:
            self._transition(job_id, JobStatus.PROCESSING)
            logger.info(MSG_JOB_PROCESSING, job_id)

            outcome = await self._attempt(request, schema, force_strict_schema=False)
            match outcome.ok:
                case True:
                    pass
                case False:
                    logger.info(MSG_JOB_RETRY, job_id, outcome.error)
                    outcome = await self._attempt(request, schema, force_strict_schema=True)
        except Exception as exc:
            logger.exception(MSG_JOB_CRASHED, job_id)
            outcome = Attempt(error=failure_reason(exc))

        elapsed = time.monotonic() - started
        match outcome:
            case Attempt(result=result, error=None):
                self._transition(job_id, JobStatus.SUCCEEDED, result=result)
                logger.info(MSG_JOB_SUCCEEDED, job_id, elapsed)
            case Attempt(error=error):
                self._transition(job_id, JobStatus.FAILED, error=error)
                logger.warning(MSG_JOB_FAILED, job_id, error, elapsed)

    async def _attempt(
        self, request: AnalysisRequest, schema: ResultSchema, force_strict_schema: bool
    ) -> Attempt:
        try:
            value = await self._gateway.call(request, force_strict_schema=force_strict_schema)
        except Exception as exc:
            return Attempt(error=failure_reason(exc))
        match schema.validate(value):
            case True:
                return Attempt(result=value)
            case False:
                return Attempt(error=ERR_SCHEMA_VALIDATION)

    def _transition(
        self,
        job_id: str,
        status: JobStatus,
        result: Any = None,
        error: str | None = None,
    ) -> None:
        job = self._store.get(job_id)
        match job:
            case None:
                logger.warning(MSG_JOB_GONE, job_id, status.value)
            case j if j.status.is_terminal:
                logger.warning(MSG_JOB_TERMINAL, job_id, j.status.value, status.value)
            case j:
                self._store.set(
                    job_id,
                    replace(j, status=status, result=result, error=error, updated_at=self._store.now()),
                )
