"""End-to-end tests for the CLI against a temporary SQLite file."""

import pytest
from click.testing import CliRunner

from sales_orders.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("SALES_ORDERS_DATABASE_URL", f"sqlite:///{tmp_path / 'orders.db'}")
    monkeypatch.setenv("SALES_ORDERS_LOG_LEVEL", "CRITICAL")
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, list(args))

    return _run


def _create(run, number="ORD-1", items="5:2:10:20,7:1:5:5"):
    return run("order", "create", "--number", number, "--date", "2024-01-01", "--items", items)


def test_db_init(run):
    result = run("db", "init")
    assert result.exit_code == 0
    assert "Database ready." in result.output


def test_create_and_show(run):
    result = _create(run)
    assert result.exit_code == 0, result.output
    assert "Order #1 created" in result.output
    assert "(status=Pending)" in result.output
    assert "25.00" in result.output

    shown = run("order", "show", "--id", "1")
    assert shown.exit_code == 0
    assert "ORD-1" in shown.output
    assert "20.00" in shown.output


def test_list(run):
    _create(run, "ORD-1")
    _create(run, "ORD-2")
    result = run("order", "list")
    assert result.exit_code == 0
    assert result.output.index("ORD-2") < result.output.index("ORD-1")


def test_list_empty(run):
    result = run("order", "list")
    assert "No orders found." in result.output


def test_update(run):
    _create(run)
    result = run(
        "order", "update", "--id", "1", "--number", "ORD-1b",
        "--date", "2024-02-02", "--items", "9:3:1.50:4.50",
    )
    assert result.exit_code == 0, result.output
    assert "Order #1 updated" in result.output
    assert "4.50" in result.output


def test_status_then_locked_delete(run):
    _create(run)
    status = run("order", "status", "--id", "1", "--status", "Completed")
    assert status.exit_code == 0
    assert "now Completed" in status.output

    deleted = run("order", "delete", "--id", "1")
    assert deleted.exit_code == 5
    assert "cannot be deleted" in deleted.output

    assert run("order", "show", "--id", "1").exit_code == 0


def test_delete(run):
    _create(run)
    assert run("order", "delete", "--id", "1").exit_code == 0
    assert run("order", "show", "--id", "1").exit_code == 3


def test_missing_line_total_counts_as_zero(run):
    result = _create(run, items="5:2:10")
    assert result.exit_code == 0, result.output
    assert "0.00" in result.output


def test_validation_error_exit_code(run):
    result = _create(run, items="5:0:10:0")
    assert result.exit_code == 2
    assert "quantity" in result.output


def test_malformed_items_is_usage_error(run):
    result = _create(run, items="just-a-product")
    assert result.exit_code == 2
    assert "Invalid item format" in result.output


def test_invalid_status_exit_code(run):
    _create(run)
    result = run("order", "status", "--id", "1", "--status", "Shipped")
    assert result.exit_code == 4
    assert "Invalid status" in result.output


def test_unknown_order_exit_code(run):
    assert run("order", "show", "--id", "99").exit_code == 3


def test_bad_config_is_usage_error(run, monkeypatch):
    monkeypatch.setenv("SALES_ORDERS_VERIFY_LINE_TOTALS", "sometimes")
    result = run("order", "list")
    assert result.exit_code == 2
    assert "SALES_ORDERS_VERIFY_LINE_TOTALS" in result.output


def test_verify_policy_from_env(run, monkeypatch):
    monkeypatch.setenv("SALES_ORDERS_VERIFY_LINE_TOTALS", "true")
    result = _create(run, items="5:2:10:21")
    assert result.exit_code == 2
    assert "does not match" in result.output
