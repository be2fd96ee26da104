from llm_cli.clients.base import LLMProvider, OnResolved
from llm_cli.config import VendorConfig
from llm_cli.types import ProviderReply

class OpenAICompatibleChatClient(LLMProvider):
    """Chat Completions endpoints (OpenAI, Mistral): Bearer auth, answer in choices[0].message.content."""

    def __init__(
        self,
        *,
        name: str,
        label: str,
        config: VendorConfig,
        endpoint: str,
        divider_width: int = 58,
        extra_headers: dict[str, str] | None = None,
        timeout_s: float | None = None,
    ):
        super().__init__(config=config, timeout_s=timeout_s)
        self.name = name
        self.label = label
        self.endpoint = endpoint
        self.divider_width = divider_width
        self.extra_headers = dict(extra_headers or {})

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
            "Authorization": f"Bearer {self.config.api_key}",
            **self.extra_headers,
        }
        data, elapsed = await self._post_json(
            self.endpoint,
            headers=headers,
            payload=self.build_payload(prompt),
            on_resolved=on_resolved,
        )
        text = self._extract(data, "choices", 0, "message", "content")
        return self._reply(text, elapsed, data)
