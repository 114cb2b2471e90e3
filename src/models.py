from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
import secrets
import time

from src.constants import ERR_NOT_FOUND, JOB_ID_RANDOM_BYTES, LANGUAGE_NAMES


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


def now_ms() -> int:
    return int(time.time() * 1000)


def new_job_id(timestamp_ms: int | None = None) -> str:
    """Time-based id with a random suffix, e.g. ``1760812345678-3f9a0c1be24d``."""
    stamp = now_ms() if timestamp_ms is None else timestamp_ms
    return f"{stamp}-{secrets.token_hex(JOB_ID_RANDOM_BYTES)}"


@dataclass(frozen=True)
class AnalysisRequest:
    images: tuple[str, ...]
    category: str
    language: str
    plan: str

    def __post_init__(self) -> None:
        match self.images:
            case () | []:
                raise ValueError("at least one image is required")
            case imgs if not all(isinstance(i, str) and i for i in imgs):
                raise ValueError("images must be non-empty base64 strings")
            case _:
                pass

        match (self.category, self.plan):
            case ("", _) | (_, ""):
                raise ValueError("category and plan must be non-empty")
            case _:
                pass

        match self.language in LANGUAGE_NAMES:
            case True:
                pass
            case False:
                raise ValueError(f"unsupported language: {self.language!r}")


@dataclass(frozen=True)
class AnalysisJob:
    id: str
    status: JobStatus = JobStatus.PENDING
    created_at: int = field(default_factory=now_ms)
    updated_at: int = field(default_factory=now_ms)
    result: Optional[Any] = None
    error: Optional[str] = None

    def to_status(self) -> dict[str, Any]:
        """Poll payload: ``status`` plus ``result`` or ``error`` only when set."""
        payload: dict[str, Any] = {"status": self.status.value}
        match self.status:
            case JobStatus.SUCCEEDED:
                payload["result"] = self.result
            case JobStatus.FAILED:
                payload["error"] = self.error
            case _:
                pass
        return payload


NOT_FOUND_STATUS: dict[str, Any] = {"status": JobStatus.FAILED.value, "error": ERR_NOT_FOUND}
