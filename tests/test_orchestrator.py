import httpx
import pytest

from factories import ScriptedGateway, all_result, make_request, single_result
from src.constants import ALL_CATEGORIES
from src.gateway.client import GatewayError
from src.job_store import JobStore
from src.models import JobStatus
from src.orchestrator import AnalysisOrchestrator, failure_reason
from src.validation import ResultSchema


async def run_job(gateway, request=None, schema=None) -> tuple[JobStore, str]:
    request = request or make_request()
    store = JobStore()
    store.create("job-1")
    orchestrator = AnalysisOrchestrator(store, gateway)
    await orchestrator.run("job-1", request, schema or ResultSchema.for_category(request.category))
    return store, "job-1"


async def test_valid_first_attempt_succeeds_without_retry():
    gateway = ScriptedGateway(single_result())

    store, job_id = await run_job(gateway)

    job = store.get(job_id)
    assert job.status is JobStatus.SUCCEEDED
    assert job.result == single_result()
    assert job.error is None
    assert [strict for _, strict in gateway.calls] == [False]


async def test_retry_then_succeed_keeps_second_result():
    second = single_result(score=11)
    gateway = ScriptedGateway({"score": 9}, second)

    store, job_id = await run_job(gateway)

    job = store.get(job_id)
    assert job.status is JobStatus.SUCCEEDED
    assert job.result == second
    assert [strict for _, strict in gateway.calls] == [False, True]


async def test_unusual_suggestions_shape_still_succeeds():
    odd = single_result(suggestions=[{"text": "Add a belt"}])
    gateway = ScriptedGateway(odd, odd)

    store, job_id = await run_job(gateway)

    job = store.get(job_id)
    assert job.status is JobStatus.SUCCEEDED
    assert job.result == odd
    assert [strict for _, strict in gateway.calls] == [False]


async def test_retry_then_fail_is_schema_validation_failed():
    gateway = ScriptedGateway({"score": 9}, {"score": 99})

    store, job_id = await run_job(gateway)

    job = store.get(job_id)
    assert job.status is JobStatus.FAILED
    assert job.error == "schema_validation_failed"
    assert job.result is None
    assert len(gateway.calls) == 2


async def test_all_categories_job_validated_against_all_schema():
    request = make_request(ALL_CATEGORIES)
    gateway = ScriptedGateway(single_result(), all_result())

    store, job_id = await run_job(gateway, request)

    job = store.get(job_id)
    assert job.status is JobStatus.SUCCEEDED
    assert job.result == all_result()
    assert len(gateway.calls) == 2


async def test_error_on_first_attempt_still_retries():
    gateway = ScriptedGateway(GatewayError("llm_http_502"), single_result())

    store, job_id = await run_job(gateway)

    assert store.get(job_id).status is JobStatus.SUCCEEDED
    assert [strict for _, strict in gateway.calls] == [False, True]


async def test_error_on_second_attempt_is_reported():
    gateway = ScriptedGateway({"score": 9}, GatewayError("llm_html_response", "<html>"))

    store, job_id = await run_job(gateway)

    job = store.get(job_id)
    assert job.status is JobStatus.FAILED
    assert job.error == "llm_html_response"


async def test_network_error_message_passed_through():
    gateway = ScriptedGateway(
        GatewayError("llm_json_parse_error"),
        httpx.ConnectError("All connection attempts failed"),
    )

    store, job_id = await run_job(gateway)

    assert store.get(job_id).error == "All connection attempts failed"


async def test_processing_is_set_before_gateway_returns():
    seen: list[JobStatus] = []
    store = JobStore()
    store.create("job-1")

    class PeekingGateway(ScriptedGateway):
        async def call(self, request, force_strict_schema=False):
            seen.append(store.get("job-1").status)
            return await super().call(request, force_strict_schema)

    await AnalysisOrchestrator(store, PeekingGateway(single_result())).run(
        "job-1", make_request(), ResultSchema.SINGLE
    )

    assert seen == [JobStatus.PROCESSING]
    assert store.get("job-1").status is JobStatus.SUCCEEDED


async def test_terminal_state_is_never_left():
    store = JobStore()
    store.create("job-1")
    orchestrator = AnalysisOrchestrator(store, ScriptedGateway(single_result(), {"score": 1}, {"score": 1}))

    await orchestrator.run("job-1", make_request(), ResultSchema.SINGLE)
    finished = store.get("job-1")
    await orchestrator.run("job-1", make_request(), ResultSchema.SINGLE)

    assert store.get("job-1") == finished


async def test_missing_job_does_not_raise():
    store = JobStore()
    orchestrator = AnalysisOrchestrator(store, ScriptedGateway(single_result()))

    await orchestrator.run("evicted", make_request(), ResultSchema.SINGLE)

    assert store.get("evicted") is None


@pytest.mark.parametrize(
    "exc,expected",
    [
        (GatewayError("llm_http_500", "body"), "llm_http_500"),
        (RuntimeError("boom"), "boom"),
        (TimeoutError(), "TimeoutError"),
    ],
)
def test_failure_reason(exc, expected):
    assert failure_reason(exc) == expected
