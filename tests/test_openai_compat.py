import json

import httpx
import pytest
import respx

from llm_cli.config import VendorConfig
from llm_cli.errors import (
    MalformedResponse,
    RequestFailed,
    ResponseStatusError,
    SerializationError,
    TransportError,
)
from llm_cli.runner import _gpt, _mistral

GPT_URL = "https://api.openai.com/v1/chat/completions"
MISTRAL_URL = "https://api.mistral.ai/v1/chat/completions"

def make_cfg(**kw):
    data = {"api_key": "test", "model_name": "gpt-4o-mini", "max_tokens": 256, "temperature": 0.2}
    data.update(kw)
    return VendorConfig.model_validate(data)

@pytest.mark.asyncio
@respx.mock
async def test_gpt_chat_parsing():
    mock = {"choices": [{"message": {"role": "assistant", "content": "hello"}}]}
    route = respx.post(GPT_URL).respond(200, json=mock)

    c = _gpt(make_cfg())
    r = await c.invoke("hi")
    assert r.text == "hello"
    assert r.provider == "GPT"
    assert r.model == "gpt-4o-mini"
    assert r.elapsed_s >= 0

    req = route.calls.last.request
    assert req.headers["authorization"] == "Bearer test"
    assert json.loads(req.content) == {
        "model": "gpt-4o-mini",
        "max_tokens": 256,
        "temperature": 0.2,
        "messages": [{"role": "user", "content": "hi"}],
    }

@pytest.mark.asyncio
@respx.mock
async def test_same_prompt_builds_same_body():
    route = respx.post(GPT_URL).respond(200, json={"choices": [{"message": {"content": "x"}}]})
    c = _gpt(make_cfg())
    await c.invoke("same prompt")
    await c.invoke("same prompt")
    first, second = [json.loads(call.request.content) for call in route.calls]
    assert first == second
    assert first["messages"] == [{"role": "user", "content": "same prompt"}]

@pytest.mark.asyncio
@respx.mock
async def test_mistral_sends_accept_header():
    route = respx.post(MISTRAL_URL).respond(200, json={"choices": [{"message": {"content": "bonjour"}}]})
    c = _mistral(make_cfg(model_name="mistral-small-latest"))
    r = await c.invoke("salut")
    assert r.text == "bonjour"
    assert r.provider == "Mistral"
    assert route.calls.last.request.headers["accept"] == "application/json"

@pytest.mark.asyncio
@respx.mock
async def test_failure_status_raises_with_status_and_body():
    respx.post(GPT_URL).respond(401, text='{"error": "bad key"}')
    resolved = []

    c = _gpt(make_cfg())
    with pytest.raises(ResponseStatusError) as ei:
        await c.invoke("hi", on_resolved=lambda: resolved.append(True))

    assert isinstance(ei.value, RequestFailed)
    assert ei.value.status_code == 401
    assert "bad key" in str(ei.value)
    # the round-trip did resolve, so the completion signal fired
    assert resolved == [True]

@pytest.mark.asyncio
@respx.mock
async def test_malformed_body_raises_after_signalling():
    respx.post(GPT_URL).respond(200, json={"choices": []})
    resolved = []

    c = _gpt(make_cfg())
    with pytest.raises(MalformedResponse):
        await c.invoke("hi", on_resolved=lambda: resolved.append(True))
    assert resolved == [True]

@pytest.mark.asyncio
@respx.mock
async def test_non_json_body_is_malformed():
    respx.post(GPT_URL).respond(200, text="<html>oops</html>")
    with pytest.raises(MalformedResponse):
        await _gpt(make_cfg()).invoke("hi")

@pytest.mark.asyncio
@respx.mock
async def test_non_string_content_is_malformed():
    respx.post(GPT_URL).respond(200, json={"choices": [{"message": {"content": None}}]})
    with pytest.raises(MalformedResponse):
        await _gpt(make_cfg()).invoke("hi")

@pytest.mark.asyncio
@respx.mock
async def test_transport_failure_does_not_signal():
    respx.post(GPT_URL).mock(side_effect=httpx.ConnectError("connection refused"))
    resolved = []

    with pytest.raises(TransportError):
        await _gpt(make_cfg()).invoke("hi", on_resolved=lambda: resolved.append(True))
    assert resolved == []

@pytest.mark.asyncio
@respx.mock
async def test_override_copy_leaves_original_untouched():
    route = respx.post(GPT_URL).respond(200, json={"choices": [{"message": {"content": "x"}}]})
    base = _gpt(make_cfg())
    hot = base.with_overrides(base.config.merged(temperature=0.9))

    await hot.invoke("hi")
    assert json.loads(route.calls.last.request.content)["temperature"] == 0.9
    assert base.config.temperature == 0.2
    assert hot.label == "GPT" and hot.endpoint == GPT_URL

@pytest.mark.asyncio
async def test_unencodable_body_fails_before_sending():
    c = _gpt(make_cfg(temperature=float("nan")))
    with pytest.raises(SerializationError):
        await c.invoke("hi")
