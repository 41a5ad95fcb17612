"""Tests for environment-driven settings."""

import pytest

from sales_orders.infrastructure.config import ConfigError, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.database_url.startswith("sqlite:///")
    assert settings.database_url.endswith("orders.db")
    assert settings.echo_sql is False
    assert settings.log_level == "WARNING"
    assert settings.log_format == "console"
    assert settings.line_item_policy.strict_line_totals is False
    assert settings.line_item_policy.verify_line_totals is False


def test_overrides():
    settings = Settings.from_env(
        {
            "SALES_ORDERS_DATABASE_URL": "postgresql+psycopg2://u:p@db/orders",
            "SALES_ORDERS_ECHO_SQL": "yes",
            "SALES_ORDERS_STRICT_LINE_TOTALS": "1",
            "SALES_ORDERS_VERIFY_LINE_TOTALS": "On",
            "SALES_ORDERS_LOG_LEVEL": "debug",
            "SALES_ORDERS_LOG_FORMAT": "JSON",
        }
    )
    assert settings.database_url == "postgresql+psycopg2://u:p@db/orders"
    assert settings.echo_sql is True
    assert settings.line_item_policy.strict_line_totals is True
    assert settings.line_item_policy.verify_line_totals is True
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"


@pytest.mark.parametrize(
    "env",
    [
        {"SALES_ORDERS_ECHO_SQL": "maybe"},
        {"SALES_ORDERS_LOG_LEVEL": "chatty"},
        {"SALES_ORDERS_LOG_FORMAT": "xml"},
    ],
)
def test_bad_values_rejected(env):
    with pytest.raises(ConfigError):
        Settings.from_env(env)
