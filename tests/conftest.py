import pytest

from factories import make_request
from src.constants import ALL_CATEGORIES
from src.models import AnalysisRequest


@pytest.fixture
def request_single() -> AnalysisRequest:
    return make_request("elegant")


@pytest.fixture
def request_all() -> AnalysisRequest:
    return make_request(ALL_CATEGORIES)
