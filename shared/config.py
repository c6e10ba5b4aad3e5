"""
Runtime configuration for the account opening demo.

Values come from environment variables so the API server, the CLI and the
demo scripts all agree on where data lives and how the simulated
collaborators behave. Every field reads its variable when Settings() is
created, not when this module is imported.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def _split_csv(value: str) -> frozenset[str]:
    return frozenset(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Environment-driven settings shared by every entry point."""

    app_name: str = "account-opening"
    version: str = "1.0.0"
    data_dir: Path = field(
        default_factory=lambda: Path(os.getenv("ACCOUNTS_DATA_DIR", str(DEFAULT_DATA_DIR)))
    )
    persist_accounts: bool = field(
        default_factory=lambda: os.getenv("ACCOUNTS_PERSIST", "false").lower() in ("1", "true", "yes")
    )
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    http_host: str = field(default_factory=lambda: os.getenv("HTTP_HOST", "127.0.0.1"))
    http_port: int = field(default_factory=lambda: int(os.getenv("HTTP_PORT", "8000")))
    background_check_watchlist: frozenset[str] = field(
        default_factory=lambda: _split_csv(os.getenv("BACKGROUND_CHECK_WATCHLIST", "999BAD1"))
    )
    background_check_unknown: frozenset[str] = field(
        default_factory=lambda: _split_csv(os.getenv("BACKGROUND_CHECK_UNKNOWN", "000NONE"))
    )
    background_check_fail_rate: float = field(
        default_factory=lambda: float(os.getenv("BACKGROUND_CHECK_FAIL_RATE", "0.0"))
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached Settings instance for the running process."""
    return Settings()
