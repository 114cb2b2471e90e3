"""HttpModelGateway — one JSON POST to the multimodal text-generation endpoint."""
import logging
from typing import Any, Optional

import httpx

from src.constants import (
    ERR_HTML_RESPONSE,
    ERR_HTTP,
    ERR_INVALID_COMPLETION,
    ERR_JSON_PARSE,
    LLM_COMPLETION_FIELD,
    MSG_LLM_CALL,
    MSG_LLM_HTTP_ERROR,
    MSG_LLM_PARSE_ERROR,
    RAW_EXCERPT_LENGTH,
)
from src.gateway.client import GatewayError, ModelGateway
from src.gateway.extract import extract_json
from src.gateway.prompt import build_messages
from src.models import AnalysisRequest

logger = logging.getLogger(__name__)


def _excerpt(raw: str) -> str:
    return raw[:RAW_EXCERPT_LENGTH]


def _looks_like_html(raw: str, content_type: str) -> bool:
    return "html" in content_type.lower() or raw.lstrip().startswith("<")


def parse_envelope(raw: str, content_type: str = "") -> Any:
    """Parse the response body; classify HTML error pages separately from garbage."""
    try:
        return extract_json(raw)
    except ValueError:
        reason = ERR_HTML_RESPONSE if _looks_like_html(raw, content_type) else ERR_JSON_PARSE
        logger.warning(MSG_LLM_PARSE_ERROR, reason, _excerpt(raw))
        raise GatewayError(reason, _excerpt(raw)) from None


def unwrap_completion(envelope: Any) -> Any:
    """Return the completion as a JSON value, parsing it when the model sent text."""
    completion = envelope.get(LLM_COMPLETION_FIELD) if isinstance(envelope, dict) else None
    match completion:
        case dict():
            return completion
        case str():
            try:
                return extract_json(completion)
            except ValueError:
                logger.warning(MSG_LLM_PARSE_ERROR, ERR_JSON_PARSE, _excerpt(completion))
                raise GatewayError(ERR_JSON_PARSE, _excerpt(completion)) from None
        case _:
            raise GatewayError(ERR_INVALID_COMPLETION, _excerpt(repr(completion)))


class HttpModelGateway(ModelGateway):

    def __init__(
        self,
        endpoint: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport

    async def call(self, request: AnalysisRequest, force_strict_schema: bool = False) -> Any:
        logger.info(MSG_LLM_CALL, force_strict_schema, len(request.images))
        body = {"messages": build_messages(request, force_strict_schema)}
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(
                self._endpoint,
                json=body,
                headers={"Content-Type": "application/json"},
            )

        raw = response.text
        match response.is_success:
            case True:
                pass
            case False:
                logger.error(MSG_LLM_HTTP_ERROR, response.status_code, _excerpt(raw))
                raise GatewayError(ERR_HTTP % response.status_code, _excerpt(raw))

        envelope = parse_envelope(raw, response.headers.get("content-type", ""))
        return unwrap_completion(envelope)
