"""ModelGateway — abstract base for multimodal model backends."""
from abc import ABC, abstractmethod
from typing import Any

from src.models import AnalysisRequest


class GatewayError(Exception):
    """A failed model round trip. ``str()`` is the short machine-readable reason."""

    def __init__(self, reason: str, detail: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.detail = detail


class ModelGateway(ABC):
    @abstractmethod
    async def call(self, request: AnalysisRequest, force_strict_schema: bool = False) -> Any:
        """Perform one model round trip and return the parsed JSON value. Raises on failure."""
        ...
