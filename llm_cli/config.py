from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from llm_cli.errors import ConfigError

logger = logging.getLogger(__name__)


class VendorConfig(BaseModel):
    """
    One vendor section of the config document.
    Gemini sections spell the model field `model_version`; both spellings load into model_name.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    api_key: str
    model_name: str = Field(min_length=1, validation_alias=AliasChoices("model_name", "model_version"))
    max_tokens: int = Field(ge=0, le=65535)
    temperature: float

    def merged(self, **changes: Any) -> VendorConfig:
        """Return a validated copy with the non-None changes applied. Raises ValidationError."""
        data = self.model_dump()
        data.update({k: v for k, v in changes.items() if v is not None})
        return VendorConfig.model_validate(data)


@dataclass(frozen=True)
class CliConfig:
    """
    The parsed config document. Built once at startup and handed to every provider.
    Vendor sections are validated only when a provider for that vendor is built.
    """
    path: Path
    document: dict[str, Any]

    def vendor(self, name: str, *, label: str | None = None) -> VendorConfig:
        label = label or name
        section = self.document.get(name)
        if not isinstance(section, dict):
            raise ConfigError(f"Incorrect {label} config in the config file")

        try:
            cfg = VendorConfig.model_validate(section)
        except ValidationError as ve:
            raise ConfigError(f"Incorrect {label} config in the config file: {ve}") from ve

        if not cfg.api_key.strip():
            raise ConfigError(f"No {label} API Key provided")
        return cfg


def load_config(path: Path) -> CliConfig:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Could not parse JSON in {path}: {e}") from e

    if not isinstance(document, dict):
        raise ConfigError(f"Config file {path} must hold a JSON object")

    logger.debug("loaded config from %s (sections: %s)", path, ", ".join(sorted(document)))
    return CliConfig(path=Path(path), document=document)
