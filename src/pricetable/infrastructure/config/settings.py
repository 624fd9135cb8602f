"""Central configuration for pricetable.

Values come from the environment (optionally seeded from a ``.env``
file via python-dotenv), falling back to the defaults below.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from pricetable.domain.exceptions import ConfigurationError

ENV_PREFIX = "PRICETABLE_"

DEFAULT_QUOTA_MB = 5.0              # what browsers give localStorage
DEFAULT_LOG_LEVEL = "WARNING"       # console only; the log file gets DEBUG

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    logs_dir: Path
    log_level: str = DEFAULT_LOG_LEVEL
    quota_mb: float = DEFAULT_QUOTA_MB
    strict_load: bool = False

    @property
    def quota_bytes(self) -> int | None:
        """Storage quota in bytes, or None when the quota is disabled."""
        if self.quota_mb <= 0:
            return None
        return int(self.quota_mb * 1024 * 1024)

    @classmethod
    def from_env(cls, base_dir: Path | None = None) -> Settings:
        """Build settings from ``PRICETABLE_*`` environment variables."""
        load_dotenv(find_dotenv(usecwd=True))
        base = base_dir or Path.cwd()

        level = _env("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Unknown log level: {level!r}")

        raw_quota = _env("QUOTA_MB", str(DEFAULT_QUOTA_MB))
        try:
            quota_mb = float(raw_quota)
        except ValueError as exc:
            raise ConfigurationError(
                f"{ENV_PREFIX}QUOTA_MB must be a number, got {raw_quota!r}"
            ) from exc

        return cls(
            data_dir=Path(_env("DATA_DIR", str(base / "data"))).expanduser(),
            logs_dir=Path(_env("LOGS_DIR", str(base / "logs"))).expanduser(),
            log_level=level,
            quota_mb=quota_mb,
            strict_load=_flag("STRICT_LOAD"),
        )

    def with_data_dir(self, data_dir: Path) -> Settings:
        return replace(self, data_dir=data_dir)


def _env(name: str, default: str) -> str:
    return os.environ.get(ENV_PREFIX + name, default)


def _flag(name: str) -> bool:
    raw = _env(name, "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")
