from __future__ import annotations

import asyncio
import logging
import sys
from typing import Coroutine, TextIO

from llm_cli.arguments import apply_overrides, parse_prompt, parse_selector, split_overrides
from llm_cli.clients.base import LLMProvider
from llm_cli.config import CliConfig
from llm_cli.console import loading_label, render_reply, run_indicator
from llm_cli.errors import ArgumentError
from llm_cli.runner import PROVIDERS, build_providers
from llm_cli.sync import CompletionCounter, ConsoleGate

logger = logging.getLogger(__name__)


async def ask_provider(
    provider: LLMProvider,
    prompt: str,
    counter: CompletionCounter,
    gate: ConsoleGate,
    *,
    out: TextIO | None = None,
) -> None:
    """
    One provider task: request, then print the answer block under the gate.

    The completion signal wraps the whole request, so the counter moves exactly once
    whichever way invoke() ends. A failure breaks the gate before that decrement, so
    the indicator can never announce and release into a run that is already lost.
    """
    out = out or sys.stdout
    with counter.signal() as resolved:
        try:
            reply = await provider.invoke(prompt, on_resolved=resolved)
        except Exception:
            gate.abort()
            raise

    async with gate:
        out.write(render_reply(reply, provider.divider_width))
        out.flush()


async def _run_all(jobs: list[Coroutine]) -> None:
    # creation order matters: the indicator is first, so its first step owns the gate
    tasks = [asyncio.create_task(j) for j in jobs]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def run_single(
    provider: LLMProvider,
    tokens: list[str],
    *,
    out: TextIO | None = None,
    interval: float = 1.0,
) -> None:
    """`<provider> [-model=..] [-temp=..] [-token=..] $ prompt...`"""
    overrides, prompt = split_overrides(tokens)
    if overrides:
        logger.info("%s overrides: %s", provider.label, overrides)
        provider = provider.with_overrides(apply_overrides(provider.config, overrides))

    counter = CompletionCounter(1)
    gate = ConsoleGate()
    await _run_all([
        run_indicator(loading_label([provider.label]), prompt, counter, gate, out=out, interval=interval),
        ask_provider(provider, prompt, counter, gate, out=out),
    ])


async def run_multiple(
    providers: list[LLMProvider],
    tokens: list[str],
    *,
    out: TextIO | None = None,
    interval: float = 1.0,
) -> None:
    """`<p1,p2,...> $ prompt...`, one concurrent task per provider."""
    prompt = parse_prompt(tokens)
    label = loading_label([p.label for p in providers])

    counter = CompletionCounter(len(providers))
    gate = ConsoleGate()
    await _run_all([
        run_indicator(label, prompt, counter, gate, out=out, interval=interval),
        *(ask_provider(p, prompt, counter, gate, out=out) for p in providers),
    ])


async def dispatch(
    argv: list[str],
    config: CliConfig,
    *,
    out: TextIO | None = None,
    interval: float = 1.0,
) -> None:
    """argv without the program name: `<selector> [overrides] $ prompt...`"""
    if not argv:
        raise ArgumentError("Missing provider selector (e.g. 'gpt' or 'gpt,claude')")

    names = parse_selector(argv[0], PROVIDERS)
    providers = build_providers(names, config)
    tokens = list(argv[1:])

    if len(providers) == 1:
        await run_single(providers[0], tokens, out=out, interval=interval)
    else:
        await run_multiple(providers, tokens, out=out, interval=interval)
