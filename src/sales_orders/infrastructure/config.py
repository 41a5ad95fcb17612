"""Runtime settings read from ``SALES_ORDERS_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from sales_orders.domain.service.line_item_validator import LineItemPolicy
from sales_orders.utils.logging import LOG_FORMATS

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigError(ValueError):
    """An environment variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:
    database_url: str
    echo_sql: bool = False
    strict_line_totals: bool = False
    verify_line_totals: bool = False
    log_level: str = "WARNING"
    log_format: str = "console"

    @property
    def line_item_policy(self) -> LineItemPolicy:
        return LineItemPolicy(
            strict_line_totals=self.strict_line_totals,
            verify_line_totals=self.verify_line_totals,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        log_level = env.get("SALES_ORDERS_LOG_LEVEL", "WARNING").strip().upper()
        if log_level not in _LEVELS:
            raise ConfigError(f"SALES_ORDERS_LOG_LEVEL: unknown level {log_level!r}")

        log_format = env.get("SALES_ORDERS_LOG_FORMAT", "console").strip().lower()
        if log_format not in LOG_FORMATS:
            raise ConfigError(f"SALES_ORDERS_LOG_FORMAT: expected one of {LOG_FORMATS}")

        return cls(
            database_url=env.get("SALES_ORDERS_DATABASE_URL")
            or f"sqlite:///{_DATA_DIR / 'orders.db'}",
            echo_sql=_flag(env, "SALES_ORDERS_ECHO_SQL"),
            strict_line_totals=_flag(env, "SALES_ORDERS_STRICT_LINE_TOTALS"),
            verify_line_totals=_flag(env, "SALES_ORDERS_VERIFY_LINE_TOTALS"),
            log_level=log_level,
            log_format=log_format,
        )


def _flag(env: Mapping[str, str], name: str) -> bool:
    raw = env.get(name, "").strip().lower()
    if not raw or raw in _FALSE:
        return False
    if raw in _TRUE:
        return True
    raise ConfigError(f"{name}: expected a boolean, got {raw!r}")
