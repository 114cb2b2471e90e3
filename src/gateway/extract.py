"""Best-effort JSON extraction from free-text model output.

Each strategy is pure and raises ``ValueError`` when it cannot produce a
value; ``extract_json`` returns the first success.
"""
import json
import re
from typing import Any, Callable

_FENCE_OPEN = re.compile(r"^```[a-zA-Z0-9_-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def strip_fences(text: str) -> str:
    """Remove a leading ```lang fence and a trailing ``` fence, if present."""
    stripped = text.strip()
    match stripped.startswith("```"):
        case True:
            stripped = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", stripped, count=1), count=1)
            return stripped.strip()
        case False:
            return stripped


def brace_slice(text: str) -> str:
    """Substring from the first ``{`` to the last ``}``; raises when there is none."""
    first, last = text.find("{"), text.rfind("}")
    match (first, last):
        case (f, l) if f != -1 and l > f:
            return text[f : l + 1]
        case _:
            raise ValueError("no JSON object found")


def parse_direct(text: str) -> Any:
    return json.loads(text.strip())


def parse_fenced(text: str) -> Any:
    return json.loads(strip_fences(text))


def parse_braced(text: str) -> Any:
    return json.loads(brace_slice(strip_fences(text)))


STRATEGIES: tuple[Callable[[str], Any], ...] = (parse_direct, parse_fenced, parse_braced)


def extract_json(text: str) -> Any:
    last_exc: ValueError | None = None
    for strategy in STRATEGIES:
        try:
            return strategy(text)
        except ValueError as exc:
            last_exc = exc
    raise ValueError(f"no parseable JSON: {last_exc}")
