"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from sqlalchemy.engine import Engine, make_url

from sales_orders.domain.service.line_item_validator import LineItemValidator
from sales_orders.infrastructure.config import Settings
from sales_orders.infrastructure.persistence.sql_order_store import (
    SqlOrderStore,
    create_order_engine,
    create_schema,
)


@lru_cache(maxsize=None)
def _engine(url: str, echo: bool) -> Engine:
    database = make_url(url).database
    if url.startswith("sqlite") and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    engine = create_order_engine(url, echo=echo)
    create_schema(engine)
    return engine


def order_store(settings: Settings) -> SqlOrderStore:
    return SqlOrderStore(_engine(settings.database_url, settings.echo_sql))


def line_item_validator(settings: Settings) -> LineItemValidator:
    return LineItemValidator(settings.line_item_policy)
