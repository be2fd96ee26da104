# llm_cli_main.py
import asyncio
import logging
import sys

from llm_cli import settings
from llm_cli.config import load_config
from llm_cli.dispatcher import dispatch
from llm_cli.errors import LLMCliError
from llm_cli.logging_config import configure_logging
from llm_cli.runner import PROVIDERS

logger = logging.getLogger("llm_cli")

USAGE = f"""\
usage: llm-cli <providers> [-model=<name>] [-temp=<float>] [-token=<n>] $ <prompt...>

  <providers>   one of {', '.join(PROVIDERS)} or several joined by ',' (e.g. gpt,claude)
  -model=...    override the configured model (single provider only)
  -temp=...     override the temperature (single provider only)
  -token=...    override max tokens, 0..65535 (single provider only)
  $             everything after it is sent as the prompt

config: {settings.DEFAULT_CONFIG_PATH} (or the LLM_CLI_CONFIG environment variable)
"""


async def _run(argv: list[str]) -> int:
    config = load_config(settings.config_path())
    await dispatch(argv, config)
    return 0


def main(argv: list[str] | None = None) -> None:
    configure_logging(settings.LOG_LEVEL)

    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] in ("-h", "--help"):
        print(USAGE, end="")
        raise SystemExit(0 if args else 2)

    try:
        code = asyncio.run(_run(args))
    except LLMCliError as e:
        logger.debug("run failed", exc_info=True)
        sys.stdout.flush()
        print(f"\n--- {e} ---", file=sys.stderr)
        raise SystemExit(1)
    raise SystemExit(code)


if __name__ == "__main__":
    main()
