from llm_cli.clients.base import LLMProvider, OnResolved
from llm_cli.config import VendorConfig
from llm_cli.types import ProviderReply

class AnthropicClient(LLMProvider):
    name = "claude"
    label = "Claude"
    divider_width = 58

    def __init__(
        self,
        *,
        config: VendorConfig,
        endpoint: str = "https://api.anthropic.com/v1/messages",
        anthropic_version: str = "2023-06-01",
        timeout_s: float | None = None,
    ):
        super().__init__(config=config, timeout_s=timeout_s)
        self.endpoint = endpoint
        self.anthropic_version = anthropic_version

    def build_payload(self, prompt: str) -> dict:
        return {
            "model": self.config.model_name,
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }

    async def invoke(self, prompt: str, *, on_resolved: OnResolved | None = None) -> ProviderReply:
        self._check_prompt(prompt)
        headers = {
            "x-api-key": self.config.api_key,
            "anthropic-version": self.anthropic_version,
        }
        data, elapsed = await self._post_json(
            self.endpoint,
            headers=headers,
            payload=self.build_payload(prompt),
            on_resolved=on_resolved,
        )
        text = self._extract(data, "content", 0, "text")
        return self._reply(text, elapsed, data)
