from llm_cli.clients.base import LLMProvider, OnResolved
from llm_cli.config import VendorConfig
from llm_cli.types import ProviderReply

class GeminiClient(LLMProvider):
    name = "gemini"
    label = "Gemini"
    divider_width = 58

    def __init__(
        self,
        *,
        config: VendorConfig,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta/models/",
        timeout_s: float | None = None,
    ):
        super().__init__(config=config, timeout_s=timeout_s)
        self.base_url = base_url.rstrip("/") + "/"

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{self.config.model_name}:generateContent"

    def build_payload(self, prompt: str) -> dict:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.config.temperature,
                "maxOutputTokens": self.config.max_tokens,
            },
        }

    async def invoke(self, prompt: str, *, on_resolved: OnResolved | None = None) -> ProviderReply:
        self._check_prompt(prompt)
        # key travels as a query parameter, not a header
        data, elapsed = await self._post_json(
            self.endpoint,
            headers={},
            params={"key": self.config.api_key},
            payload=self.build_payload(prompt),
            on_resolved=on_resolved,
        )
        text = self._extract(data, "candidates", 0, "content", "parts", 0, "text")
        return self._reply(text, elapsed, data)
