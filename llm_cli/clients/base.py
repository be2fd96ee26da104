from __future__ import annotations

import copy
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

import httpx

from llm_cli import settings
from llm_cli.config import VendorConfig
from llm_cli.errors import (
    ArgumentError,
    MalformedResponse,
    ResponseStatusError,
    SerializationError,
    TransportError,
)
from llm_cli.types import ProviderReply

logger = logging.getLogger(__name__)

OnResolved = Callable[[], None]


class LLMProvider(ABC):
    """
    One vendor behind a uniform `invoke(prompt) -> ProviderReply`.

    name is the selector token ("gpt"), label the display name ("GPT"),
    divider_width the length of the rule printed under its answer.
    """
    name: str = ""
    label: str = ""
    divider_width: int = 58

    def __init__(self, *, config: VendorConfig, timeout_s: float | None = None):
        self.config = config
        self.timeout_s = settings.REQUEST_TIMEOUT_S if timeout_s is None else timeout_s

    @property
    def model(self) -> str:
        return self.config.model_name

    def with_overrides(self, config: VendorConfig) -> LLMProvider:
        clone = copy.copy(self)
        clone.config = config
        return clone

    @abstractmethod
    async def invoke(self, prompt: str, *, on_resolved: OnResolved | None = None) -> ProviderReply:
        ...

    def _check_prompt(self, prompt: str) -> None:
        if not prompt:
            raise ArgumentError(f"Empty prompt for {self.label}")

    def _encode(self, payload: dict) -> bytes:
        try:
            return json.dumps(payload, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Could not stringify {self.label} request to JSON: {e}") from e

    async def _post_json(
        self,
        url: str,
        *,
        headers: dict[str, str],
        payload: dict,
        params: dict[str, str] | None = None,
        on_resolved: OnResolved | None = None,
    ) -> tuple[Any, float]:
        """
        Send one POST and decode the JSON body. Returns (data, elapsed seconds).

        on_resolved fires as soon as the response is in, before the status is
        checked or the body parsed. It is not called when the transport fails.
        """
        body = self._encode(payload)
        headers = {"Content-Type": "application/json", **headers}

        logger.debug("POST %s model=%s", url, self.model)
        t0 = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                r = await client.post(url, headers=headers, params=params, content=body)
        except httpx.RequestError as e:
            raise TransportError(f"Request to {self.label} endpoint failed: {e!r}", provider=self.label) from e
        elapsed = time.perf_counter() - t0

        if on_resolved:
            on_resolved()
        logger.debug("%s answered %s in %.2fs", self.label, r.status_code, elapsed)

        if not r.is_success:
            raise ResponseStatusError(
                f"Request to {self.label} failed with:",
                provider=self.label,
                status_code=r.status_code,
                body=r.text,
            )

        try:
            return r.json(), elapsed
        except ValueError as e:
            raise MalformedResponse(f"Failed parsing {self.label} response message: {e}") from e

    def _extract(self, data: Any, *path: str | int) -> Any:
        node = data
        try:
            for key in path:
                node = node[key]
        except (KeyError, IndexError, TypeError):
            raise MalformedResponse(f"Malformed {self.label} JSON response") from None
        return node

    def _reply(self, text: Any, elapsed: float, raw: Any) -> ProviderReply:
        if not isinstance(text, str):
            raise MalformedResponse(f"Malformed {self.label} JSON response")
        return ProviderReply(provider=self.label, model=self.model, text=text, elapsed_s=elapsed, raw=raw)
