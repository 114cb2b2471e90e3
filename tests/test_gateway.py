import json

import httpx
import pytest

from factories import make_request, single_result
from src.gateway.client import GatewayError, ModelGateway
from src.gateway.http import HttpModelGateway, parse_envelope, unwrap_completion

ENDPOINT = "http://llm.test/text/llm/"


def make_gateway(handler) -> HttpModelGateway:
    return HttpModelGateway(ENDPOINT, transport=httpx.MockTransport(handler))


def completion_response(completion, status: int = 200) -> httpx.Response:
    return httpx.Response(status, json={"completion": completion})


def test_http_gateway_implements_abc():
    assert issubclass(HttpModelGateway, ModelGateway)


def test_gateway_error_str_is_reason():
    exc = GatewayError("llm_http_502", "<html>bad gateway")

    assert str(exc) == "llm_http_502"
    assert exc.detail == "<html>bad gateway"


# ── request shape ─────────────────────────────────────────────────────────────


async def test_call_posts_messages_json():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return completion_response(single_result())

    await make_gateway(handler).call(make_request(images=("AAA=", "BBB=")))

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == ENDPOINT
    assert request.headers["content-type"].startswith("application/json")
    body = json.loads(request.content)
    assert list(body) == ["messages"]
    images = [p for p in body["messages"][1]["content"] if p["type"] == "image"]
    assert len(images) == 2


async def test_strict_flag_reaches_system_prompt():
    prompts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        prompts.append(json.loads(request.content)["messages"][0]["content"])
        return completion_response(single_result())

    gateway = make_gateway(handler)
    await gateway.call(make_request(), force_strict_schema=False)
    await gateway.call(make_request(), force_strict_schema=True)

    assert "colorCoordination" not in prompts[0]
    assert "colorCoordination" in prompts[1]


# ── completion handling ───────────────────────────────────────────────────────


async def test_object_completion_returned_as_is():
    result = await make_gateway(lambda _: completion_response(single_result())).call(make_request())

    assert result == single_result()


@pytest.mark.parametrize(
    "wrap",
    [
        lambda raw: raw,
        lambda raw: f"```json\n{raw}\n```",
        lambda raw: f"Sure! {raw} Thanks",
    ],
)
async def test_string_completion_extracted(wrap):
    raw = json.dumps(single_result())
    gateway = make_gateway(lambda _: completion_response(wrap(raw)))

    assert await gateway.call(make_request()) == single_result()


async def test_envelope_embedded_in_prose_is_recovered():
    body = "proxy note: " + json.dumps({"completion": single_result()}) + " end"
    gateway = make_gateway(lambda _: httpx.Response(200, text=body))

    assert await gateway.call(make_request()) == single_result()


@pytest.mark.parametrize("completion", [42, None, ["a"], True])
async def test_non_string_non_object_completion_is_invalid(completion):
    gateway = make_gateway(lambda _: completion_response(completion))

    with pytest.raises(GatewayError, match="invalid_completion"):
        await gateway.call(make_request())


async def test_missing_completion_is_invalid():
    gateway = make_gateway(lambda _: httpx.Response(200, json={"other": 1}))

    with pytest.raises(GatewayError, match="invalid_completion"):
        await gateway.call(make_request())


async def test_unparseable_completion_string():
    gateway = make_gateway(lambda _: completion_response("I cannot rate this outfit."))

    with pytest.raises(GatewayError, match="llm_json_parse_error"):
        await gateway.call(make_request())


# ── failures ──────────────────────────────────────────────────────────────────


async def test_non_2xx_is_http_error_with_excerpt():
    gateway = make_gateway(lambda _: httpx.Response(503, text="x" * 500))

    with pytest.raises(GatewayError) as info:
        await gateway.call(make_request())

    assert info.value.reason == "llm_http_503"
    assert info.value.detail == "x" * 120


async def test_html_body_classified_by_content_type():
    gateway = make_gateway(
        lambda _: httpx.Response(200, text="Service Unavailable", headers={"content-type": "text/html"})
    )

    with pytest.raises(GatewayError, match="llm_html_response"):
        await gateway.call(make_request())


def test_html_body_classified_by_leading_angle_bracket():
    with pytest.raises(GatewayError, match="llm_html_response"):
        parse_envelope("  <!DOCTYPE html><p>oops</p>", "application/json")


def test_plain_garbage_is_json_parse_error():
    with pytest.raises(GatewayError) as info:
        parse_envelope("not json at all " * 20, "text/plain")

    assert info.value.reason == "llm_json_parse_error"
    assert len(info.value.detail) == 120


def test_unwrap_rejects_non_object_envelope():
    with pytest.raises(GatewayError, match="invalid_completion"):
        unwrap_completion(["completion"])


async def test_network_error_propagates():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(httpx.ConnectError, match="connection refused"):
        await make_gateway(handler).call(make_request())
