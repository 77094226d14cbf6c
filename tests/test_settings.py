"""Tests for configuration management and the connection factory."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from polysql import Dialect, Environment, Settings, get_settings, load_settings
from polysql.database import (
    SQLAlchemyConnection,
    SQLiteConnection,
    create_database_engine,
    open_connection,
)
from polysql.database.implementations.sqlite.sqlite_connection import MEMORY_DATABASE


def test_environment_values() -> None:
    """Test environment enum values."""
    assert Environment.DEVELOPMENT == "development"
    assert Environment.PRODUCTION == "production"
    assert Environment.TESTING == "testing"


def test_default_settings() -> None:
    """Test default settings values."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.dialect == "sqlite"
        assert settings.dialect_enum == Dialect.SQLITE
        assert settings.database_url == "sqlite:///db/polysql.db"
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.log_colors is True
        assert settings.is_testing is False


def test_testing_mode_uses_memory_database() -> None:
    """Testing mode never points at a file database."""
    settings = Settings(environment=Environment.TESTING, database_url="sqlite:///x.db")

    assert settings.is_testing is True
    assert settings.database_url == "sqlite://"


def test_log_level_normalized() -> None:
    """Log level names are upper-cased."""
    assert Settings(log_level="debug").log_level == "DEBUG"


def test_log_level_invalid() -> None:
    """Unknown log levels are rejected."""
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")


@pytest.mark.parametrize(
    "name,expected",
    [
        ("mysql", Dialect.MYSQL),
        ("postgres", Dialect.POSTGRES),
        ("postgresql", Dialect.POSTGRES),
        ("mssql", Dialect.SQLITE),
    ],
)
def test_dialect_enum(name: str, expected: Dialect) -> None:
    """Dialect names resolve with the SQLite fallback."""
    assert Settings(dialect=name).dialect_enum == expected


def test_custom_settings() -> None:
    """Test custom settings via environment variables."""
    env_vars = {
        "POLYSQL_ENV": "production",
        "POLYSQL_DIALECT": "postgres",
        "POLYSQL_DATABASE_URL": "postgresql://app@db/app",
        "POLYSQL_LOG_LEVEL": "warning",
        "POLYSQL_LOG_FILE": "logs/polysql.log",
        "POLYSQL_LOG_COLORS": "off",
    }

    with patch.dict(os.environ, env_vars, clear=True):
        settings = load_settings()

        assert settings.environment == Environment.PRODUCTION
        assert settings.dialect_enum == Dialect.POSTGRES
        assert settings.database_url == "postgresql://app@db/app"
        assert settings.log_level == "WARNING"
        assert settings.log_file == Path("logs/polysql.log")
        assert settings.log_colors is False


def test_testing_mode_from_environment() -> None:
    """POLYSQL_ENV=testing switches to the in-memory database."""
    with patch.dict(os.environ, {"POLYSQL_ENV": "testing"}, clear=True):
        settings = load_settings()

        assert settings.is_testing is True
        assert settings.database_url == "sqlite://"


@pytest.mark.parametrize("true_value", ["true", "True", "1", "yes", "on"])
def test_log_colors_parsing_true(true_value: str) -> None:
    """Test log color boolean parsing for true values."""
    with patch.dict(os.environ, {"POLYSQL_LOG_COLORS": true_value}, clear=True):
        assert load_settings().log_colors is True


@pytest.mark.parametrize("false_value", ["false", "0", "no", "off", ""])
def test_log_colors_parsing_false(false_value: str) -> None:
    """Test log color boolean parsing for false values."""
    with patch.dict(os.environ, {"POLYSQL_LOG_COLORS": false_value}, clear=True):
        assert load_settings().log_colors is False


def test_get_settings_is_cached() -> None:
    """get_settings loads once per process."""
    get_settings.cache_clear()
    try:
        with patch.dict(os.environ, {"POLYSQL_ENV": "testing"}, clear=True):
            first = get_settings()
            second = get_settings()
        assert first is second
    finally:
        get_settings.cache_clear()


def test_open_connection_memory_sqlite() -> None:
    """Testing settings open an in-memory SQLite handle."""
    connection = open_connection(Settings(environment=Environment.TESTING))
    try:
        assert isinstance(connection, SQLiteConnection)
        assert connection.db_path == MEMORY_DATABASE
        assert connection.is_connected
    finally:
        connection.disconnect()


def test_open_connection_file_sqlite(tmp_path: Path) -> None:
    """File URLs create the parent directory and open that file."""
    db_file = tmp_path / "nested" / "app.db"
    connection = open_connection(Settings(database_url=f"sqlite:///{db_file}"))
    try:
        assert isinstance(connection, SQLiteConnection)
        assert Path(connection.db_path) == db_file
        assert db_file.parent.is_dir()
    finally:
        connection.disconnect()


def test_open_connection_warns_on_dialect_mismatch(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """A dialect that does not match the backend is logged."""
    settings = Settings(environment=Environment.TESTING, dialect="mysql")

    with caplog.at_level(logging.WARNING, logger="polysql"):
        connection = open_connection(settings)
    connection.disconnect()

    assert "does not match database backend 'sqlite'" in caplog.text


def test_create_database_engine_sqlite() -> None:
    """SQLite URLs produce a usable engine."""
    engine = create_database_engine(Settings(environment=Environment.TESTING))
    try:
        assert engine.url.get_backend_name() == "sqlite"
        connection = SQLAlchemyConnection(engine)
        with connection:
            assert connection.backend_name == "sqlite"
    finally:
        engine.dispose()
