"""Prompt construction for the multimodal model — pure, no I/O."""
from src.constants import (
    ALL_CATEGORIES,
    CATEGORIES,
    CATEGORY_FOCUS,
    DEFAULT_LENGTH_POLICY,
    IMAGE_DATA_URI,
    LANGUAGE_NAMES,
    LENGTH_POLICIES,
    PROMPT_FOCUS,
    PROMPT_LANGUAGE,
    PROMPT_SCHEMA_ALL,
    PROMPT_SCHEMA_SINGLE,
    PROMPT_SIXTIES_NOTE,
    PROMPT_SYSTEM,
    PROMPT_USER,
)
from src.models import AnalysisRequest


def length_policy(plan: str) -> str:
    return LENGTH_POLICIES.get(plan, DEFAULT_LENGTH_POLICY)


def language_name(language: str) -> str:
    return LANGUAGE_NAMES[language]


def schema_instruction(category: str) -> str:
    match category:
        case c if c == ALL_CATEGORIES:
            return PROMPT_SCHEMA_ALL % ", ".join(CATEGORIES)
        case _:
            return PROMPT_SCHEMA_SINGLE


def build_system_prompt(request: AnalysisRequest, force_strict_schema: bool) -> str:
    lines = [
        PROMPT_SYSTEM % (request.category, length_policy(request.plan)),
        PROMPT_LANGUAGE % language_name(request.language),
    ]
    match CATEGORY_FOCUS.get(request.category):
        case None:
            pass
        case focus:
            lines.append(PROMPT_FOCUS % focus)
    match request.category:
        case "sixties":
            lines.append(PROMPT_SIXTIES_NOTE)
        case _:
            pass
    match force_strict_schema:
        case True:
            lines.append(schema_instruction(request.category))
        case False:
            pass
    return "\n".join(lines)


def build_messages(request: AnalysisRequest, force_strict_schema: bool = False) -> list[dict]:
    """System message plus one user message carrying every image as a data URI."""
    user_text = PROMPT_USER % (request.category, language_name(request.language))
    images = [{"type": "image", "image": IMAGE_DATA_URI % img} for img in request.images]
    return [
        {"role": "system", "content": build_system_prompt(request, force_strict_schema)},
        {"role": "user", "content": [{"type": "text", "text": user_text}, *images]},
    ]
