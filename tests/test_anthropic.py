import json

import pytest
import respx

from llm_cli.clients.anthropic import AnthropicClient
from llm_cli.config import VendorConfig
from llm_cli.errors import MalformedResponse

def make_cfg():
    return VendorConfig(api_key="test", model_name="claude-haiku-4-5", max_tokens=800, temperature=0.0)

@pytest.mark.asyncio
@respx.mock
async def test_anthropic_parsing():
    mock = {
        "content": [{"type": "text", "text": "hello"}],
        "usage": {"input_tokens": 1, "output_tokens": 1},
    }

    route = respx.post("https://api.anthropic.com/v1/messages").respond(200, json=mock)

    c = AnthropicClient(config=make_cfg())
    r = await c.invoke("hi")
    assert r.text == "hello"
    assert r.provider == "Claude"
    assert r.raw["usage"]["output_tokens"] == 1

    req = route.calls.last.request
    assert req.headers["x-api-key"] == "test"
    assert req.headers["anthropic-version"] == "2023-06-01"
    assert json.loads(req.content)["messages"] == [{"role": "user", "content": "hi"}]

@pytest.mark.asyncio
@respx.mock
async def test_anthropic_missing_text_is_malformed():
    respx.post("https://api.anthropic.com/v1/messages").respond(200, json={"content": []})

    c = AnthropicClient(config=make_cfg())
    with pytest.raises(MalformedResponse):
        await c.invoke("hi")
