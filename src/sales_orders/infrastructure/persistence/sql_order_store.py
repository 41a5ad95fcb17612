"""SQLAlchemy-backed implementation of OrderStore.

Each ``transaction()`` checks a connection out of the engine's pool and
wraps it in ``Engine.begin()``: the connection is committed when the
block finishes, rolled back when it raises, and returned to the pool
either way.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    create_engine,
    delete,
    event,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Connection, Engine, Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from sales_orders.domain.exceptions import PersistenceError
from sales_orders.domain.model.order import (
    ORDER_NUMBER_MAX_LENGTH,
    PRODUCT_ID_MAX_LENGTH,
    OrderHeader,
    OrderLineItem,
)
from sales_orders.domain.model.status import OrderStatus
from sales_orders.domain.model.value_objects import (
    MONEY_DIGITS,
    MONEY_PLACES,
    Money,
    Quantity,
)
from sales_orders.domain.repository.order_store import OrderStore, OrderTransaction
from sales_orders.utils.logging import get_logger

logger = get_logger(__name__)

metadata = MetaData()

order_headers = Table(
    "order_headers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_number", String(ORDER_NUMBER_MAX_LENGTH), nullable=False),
    Column("order_date", Date, nullable=False),
    Column("item_count", Integer, nullable=False),
    Column("final_price", Numeric(MONEY_DIGITS, MONEY_PLACES), nullable=False),
    Column("status", String(16), nullable=False, default=OrderStatus.PENDING.value),
)

order_line_items = Table(
    "order_line_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "order_id",
        Integer,
        ForeignKey("order_headers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("product_id", String(PRODUCT_ID_MAX_LENGTH), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", Numeric(MONEY_DIGITS, MONEY_PLACES), nullable=False),
    Column("line_total", Numeric(MONEY_DIGITS, MONEY_PLACES), nullable=False),
)


def create_order_engine(url: str, echo: bool = False) -> Engine:
    """Build an engine, with SQLite tuned for foreign keys and in-memory use."""
    kwargs: dict = {"echo": echo}
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every checkout sees an empty DB.
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def create_schema(engine: Engine) -> None:
    """Create both tables if they do not exist yet."""
    try:
        metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Could not create schema: {exc}") from exc


class SqlOrderStore(OrderStore):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @contextmanager
    def transaction(self) -> Iterator[OrderTransaction]:
        try:
            with self._engine.begin() as conn:
                yield SqlOrderTransaction(conn)
        except SQLAlchemyError as exc:
            logger.error("Transaction rolled back", error=str(exc))
            raise PersistenceError(f"Storage failure: {exc}") from exc


class SqlOrderTransaction(OrderTransaction):

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    # --- Writes ---------------------------------------------------------------

    def insert_order_header(self, header: OrderHeader) -> OrderHeader:
        result = self._conn.execute(
            insert(order_headers).values(
                order_number=header.order_number,
                order_date=header.order_date,
                item_count=header.item_count,
                final_price=header.final_price.amount,
                status=header.status.value,
            )
        )
        return OrderHeader(
            id=result.inserted_primary_key[0],
            order_number=header.order_number,
            order_date=header.order_date,
            item_count=header.item_count,
            final_price=header.final_price,
            status=header.status,
        )

    def insert_line_item(self, order_id: int, item: OrderLineItem) -> OrderLineItem:
        result = self._conn.execute(
            insert(order_line_items).values(
                order_id=order_id,
                product_id=item.product_id,
                quantity=item.quantity.value,
                unit_price=item.unit_price.amount,
                line_total=item.line_total.amount,
            )
        )
        return OrderLineItem(
            id=result.inserted_primary_key[0],
            order_id=order_id,
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            line_total=item.line_total,
        )

    def update_order_header(self, header: OrderHeader) -> None:
        self._conn.execute(
            update(order_headers)
            .where(order_headers.c.id == header.id)
            .values(
                order_number=header.order_number,
                order_date=header.order_date,
                item_count=header.item_count,
                final_price=header.final_price.amount,
            )
        )

    def update_order_status(self, order_id: int, status: OrderStatus) -> None:
        self._conn.execute(
            update(order_headers)
            .where(order_headers.c.id == order_id)
            .values(status=status.value)
        )

    def delete_line_items_for_order(self, order_id: int) -> int:
        result = self._conn.execute(
            delete(order_line_items).where(order_line_items.c.order_id == order_id)
        )
        return result.rowcount

    def delete_order_header(self, order_id: int) -> None:
        self._conn.execute(delete(order_headers).where(order_headers.c.id == order_id))

    # --- Reads ----------------------------------------------------------------

    def get_order_header(self, order_id: int) -> OrderHeader | None:
        row = self._conn.execute(
            select(order_headers).where(order_headers.c.id == order_id)
        ).first()
        return _to_header(row) if row is not None else None

    def get_line_items_for_order(self, order_id: int) -> list[OrderLineItem]:
        rows = self._conn.execute(
            select(order_line_items)
            .where(order_line_items.c.order_id == order_id)
            .order_by(order_line_items.c.id.asc())
        )
        return [_to_line_item(row) for row in rows]

    def list_order_headers(self) -> list[OrderHeader]:
        rows = self._conn.execute(select(order_headers).order_by(order_headers.c.id.desc()))
        return [_to_header(row) for row in rows]


# --- Row mapping --------------------------------------------------------------


def _to_header(row: Row) -> OrderHeader:
    return OrderHeader(
        id=row.id,
        order_number=row.order_number,
        order_date=row.order_date,
        item_count=row.item_count,
        final_price=Money.of(row.final_price),
        status=OrderStatus.parse(row.status),
    )


def _to_line_item(row: Row) -> OrderLineItem:
    return OrderLineItem(
        id=row.id,
        order_id=row.order_id,
        product_id=row.product_id,
        quantity=Quantity(row.quantity),
        unit_price=Money.of(row.unit_price),
        line_total=Money.of(row.line_total),
    )
