from typing import Callable

from llm_cli.clients.anthropic import AnthropicClient
from llm_cli.clients.base import LLMProvider
from llm_cli.clients.gemini import GeminiClient
from llm_cli.clients.openai_compat import OpenAICompatibleChatClient
from llm_cli.config import CliConfig, VendorConfig

def _gpt(cfg: VendorConfig) -> LLMProvider:
    return OpenAICompatibleChatClient(
        name="gpt",
        label="GPT",
        config=cfg,
        endpoint="https://api.openai.com/v1/chat/completions",
        divider_width=55,
    )

def _mistral(cfg: VendorConfig) -> LLMProvider:
    return OpenAICompatibleChatClient(
        name="mistral",
        label="Mistral",
        config=cfg,
        endpoint="https://api.mistral.ai/v1/chat/completions",
        divider_width=58,
        extra_headers={"Accept": "application/json"},
    )

def _claude(cfg: VendorConfig) -> LLMProvider:
    return AnthropicClient(config=cfg)

def _gemini(cfg: VendorConfig) -> LLMProvider:
    return GeminiClient(config=cfg)

# selector token -> (display label, factory)
PROVIDERS: dict[str, tuple[str, Callable[[VendorConfig], LLMProvider]]] = {
    "gpt": ("GPT", _gpt),
    "claude": ("Claude", _claude),
    "mistral": ("Mistral", _mistral),
    "gemini": ("Gemini", _gemini),
}

def build_provider(name: str, config: CliConfig) -> LLMProvider:
    label, factory = PROVIDERS[name]
    return factory(config.vendor(name, label=label))

def build_providers(names: list[str], config: CliConfig) -> list[LLMProvider]:
    """Credentials for every selected vendor are checked here, before any request goes out."""
    return [build_provider(n, config) for n in names]
