from __future__ import annotations

import asyncio
import sys
from typing import TextIO

from llm_cli.sync import CompletionCounter, ConsoleGate
from llm_cli.types import ProviderReply

HEADER_DASHES = 10
CLEAR_WIDTH = 50


def loading_label(labels: list[str]) -> str:
    """
    "Asking GPT", "Asking GPT, Claude", "Asking GPT, Claude and Mistral", ...
    """
    joined = " and ".join(labels)
    if len(labels) >= 2:
        joined = joined.replace(" and ", ", ", max(1, len(labels) - 2))
    return f"Asking {joined}"


def render_reply(reply: ProviderReply, divider_width: int) -> str:
    dashes = "-" * HEADER_DASHES
    header = f"{dashes} {reply.provider} Response (took {reply.elapsed_s:.2f} seconds) {dashes}"
    return f"{header}\n\n{reply.text}\n\n{'-' * divider_width}\n\n"


def _write(out: TextIO, text: str) -> None:
    out.write(text)
    out.flush()


async def run_indicator(
    label: str,
    prompt: str,
    counter: CompletionCounter,
    gate: ConsoleGate,
    *,
    out: TextIO | None = None,
    interval: float = 1.0,
    dots: int = 3,
) -> None:
    """
    Spin `label...` while any round-trip is outstanding, then echo the prompt.

    The gate is held for the whole loop; provider answers queue behind it and
    therefore always land after the echoed prompt.
    """
    out = out or sys.stdout
    width = max(CLEAR_WIDTH, len(label) + dots)
    clear = "\r" + " " * width + "\b" * width

    async with gate.hold():
        _write(out, "\n")
        while not counter.done and not gate.broken:
            _write(out, label)
            await asyncio.sleep(interval)
            for _ in range(dots):
                if counter.done or gate.broken:
                    break
                _write(out, ".")
                await asyncio.sleep(interval)
            _write(out, clear)

        if gate.broken:
            return
        _write(out, f"{prompt}\n\n")
