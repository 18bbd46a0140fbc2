from __future__ import annotations

import os
from dataclasses import dataclass
from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    rpc_timeout_s: float = 60.0
    confirm_timeout_s: float = 90.0
    verbose: bool = False

    @staticmethod
    def from_env() -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))

        verbose = os.getenv("TOKEN_CLI_VERBOSE", "").strip().lower() in ("1", "true", "yes")

        return Settings(
            rpc_timeout_s=_env_float("TOKEN_CLI_RPC_TIMEOUT", 60.0),
            confirm_timeout_s=_env_float("TOKEN_CLI_CONFIRM_TIMEOUT", 90.0),
            verbose=verbose,
        )
