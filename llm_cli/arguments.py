from __future__ import annotations

import argparse
import logging
from typing import Any, Iterable

from pydantic import ValidationError

from llm_cli.config import VendorConfig
from llm_cli.errors import ArgumentError, InvalidArgument, MissingPromptMarker

logger = logging.getLogger(__name__)

PROMPT_MARKER = "$"


def parse_selector(arg: str, known: Iterable[str]) -> list[str]:
    """
    "gpt,claude" -> ["gpt", "claude"]. Unknown or empty names are fatal; repeats collapse.
    """
    known = list(known)
    names: list[str] = []
    for raw in arg.split(","):
        name = raw.strip().lower()
        if name not in known:
            raise InvalidArgument(
                f"Invalid first argument {raw!r}, choose between "
                f"{', '.join(repr(k) for k in known)} or a combination of those separated by ','"
            )
        if name in names:
            logger.warning("provider %r selected more than once; asking it once", name)
            continue
        names.append(name)
    return names


def _split_at_marker(tokens: list[str]) -> tuple[list[str], str]:
    try:
        idx = tokens.index(PROMPT_MARKER)
    except ValueError:
        raise MissingPromptMarker(PROMPT_MARKER) from None

    prompt = " ".join(tokens[idx + 1:]).strip()
    if not prompt:
        raise ArgumentError(f"Prompt text after '{PROMPT_MARKER}' is empty")
    return tokens[:idx], prompt


def parse_prompt(tokens: list[str]) -> str:
    """Multi-provider form: everything after the marker is the prompt, overrides are ignored."""
    before, prompt = _split_at_marker(tokens)
    if before:
        logger.warning("ignoring %s: overrides are only accepted with a single provider", " ".join(before))
    return prompt


def uint16(value: str) -> int:
    n = int(value)
    if not 0 <= n <= 65535:
        raise argparse.ArgumentTypeError(f"{value} is outside 0..65535")
    return n


class _OverrideParser(argparse.ArgumentParser):
    def error(self, message):
        raise ArgumentError(f"Could not parse override: {message}")


def _override_parser() -> argparse.ArgumentParser:
    ap = _OverrideParser(prog="llm-cli", add_help=False, allow_abbrev=False)
    ap.add_argument("-model", dest="model_name", default=None, help="Model name for this run")
    ap.add_argument("-temp", dest="temperature", type=float, default=None, help="Sampling temperature")
    ap.add_argument("-token", dest="max_tokens", type=uint16, default=None, help="Max output tokens (0..65535)")
    return ap


def split_overrides(tokens: list[str]) -> tuple[dict[str, Any], str]:
    """
    Single-provider form: `-model=<name> -temp=<float> -token=<uint16> $ prompt words`.
    Returns (overrides that were given, prompt).
    """
    before, prompt = _split_at_marker(tokens)
    ns, extra = _override_parser().parse_known_args(before)
    if extra:
        raise InvalidArgument(f"Found invalid argument: {extra[0]}")
    overrides = {k: v for k, v in vars(ns).items() if v is not None}
    return overrides, prompt


def apply_overrides(config: VendorConfig, overrides: dict[str, Any]) -> VendorConfig:
    try:
        return config.merged(**overrides)
    except ValidationError as ve:
        raise ArgumentError(f"Invalid override value: {ve}") from ve
