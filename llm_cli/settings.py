import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from llm_cli.errors import ConfigError

load_dotenv()

def env(key: str, default: str | None = None) -> str | None:
    return os.getenv(key, default)

CONFIG_PATH = env("LLM_CLI_CONFIG")
LOG_LEVEL = env("LLM_CLI_LOG_LEVEL", "WARNING")
REQUEST_TIMEOUT_S = float(env("LLM_CLI_TIMEOUT_S", "120"))

DEFAULT_CONFIG_PATH = Path("/etc/llm_cli_config.json")


def config_path(override: str | None = None, platform: str | None = None) -> Path:
    chosen = override or CONFIG_PATH
    if chosen:
        return Path(chosen)

    platform = platform or sys.platform
    if platform.startswith("linux") or platform == "darwin":
        return DEFAULT_CONFIG_PATH
    raise ConfigError("Unsupported operating system")
