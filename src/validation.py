"""ResultValidator — pure shape checks for model output. Never raises."""
import math
from enum import Enum
from typing import Any, TypeGuard, TypedDict

from src.constants import (
    ALL_CATEGORIES,
    CATEGORIES,
    MIN_FIELD_LENGTH,
    MIN_OVERALL_ANALYSIS_LENGTH,
    SCORE_MAX,
    SINGLE_TEXT_FIELDS,
)


class SingleResult(TypedDict, total=False):
    score: float
    style: str
    colorCoordination: str
    accessories: str
    harmony: str
    suggestions: list[str]


class CategoryResult(TypedDict, total=False):
    category: str
    score: float
    analysis: str
    suggestions: list[str]


class AllResult(TypedDict):
    overallScore: float
    overallAnalysis: str
    results: list[CategoryResult]


# ── primitive predicates ──────────────────────────────────────────────────────


def is_valid_score(value: Any) -> bool:
    match value:
        case bool():
            return False
        case int():
            return 0 < value <= SCORE_MAX
        case float():
            return math.isfinite(value) and 0 < value <= SCORE_MAX
        case _:
            return False


def has_min_length(value: Any, minimum: int, collapse: bool = False) -> bool:
    """Trimmed length check; ``collapse`` also squeezes inner whitespace runs."""
    match value:
        case str() if collapse:
            return len(" ".join(value.split())) >= minimum
        case str():
            return len(value.strip()) >= minimum
        case _:
            return False


# ── schemas ───────────────────────────────────────────────────────────────────


def is_valid_single(value: Any) -> TypeGuard[SingleResult]:
    match value:
        case dict():
            pass
        case _:
            return False
    return (
        is_valid_score(value.get("score"))
        and all(has_min_length(value.get(f), MIN_FIELD_LENGTH, collapse=True) for f in SINGLE_TEXT_FIELDS)
    )


def is_valid_category_entry(entry: Any) -> bool:
    match entry:
        case {"category": str() as category, "score": score, "analysis": analysis}:
            return (
                category in CATEGORIES
                and is_valid_score(score)
                and has_min_length(analysis, MIN_FIELD_LENGTH)
            )
        case _:
            return False


def is_valid_all(value: Any) -> TypeGuard[AllResult]:
    match value:
        case {"overallScore": score, "overallAnalysis": analysis, "results": list() as results}:
            return (
                is_valid_score(score)
                and has_min_length(analysis, MIN_OVERALL_ANALYSIS_LENGTH)
                and len(results) == len(CATEGORIES)
                and all(map(is_valid_category_entry, results))
            )
        case _:
            return False


class ResultSchema(Enum):
    """Which result shape a job expects; chosen once from the request category."""

    SINGLE = "single"
    ALL = "all"

    @classmethod
    def for_category(cls, category: str) -> "ResultSchema":
        return cls.ALL if category == ALL_CATEGORIES else cls.SINGLE

    def validate(self, value: Any) -> bool:
        match self:
            case ResultSchema.ALL:
                return is_valid_all(value)
            case ResultSchema.SINGLE:
                return is_valid_single(value)
