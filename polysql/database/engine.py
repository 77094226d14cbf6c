"""Connection factory driven by settings."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from polysql.config import Settings
from polysql.database.dialect import dialect_from_name
from polysql.database.implementations import SQLAlchemyConnection, SQLiteConnection
from polysql.database.implementations.sqlite.sqlite_connection import MEMORY_DATABASE
from polysql.database.interfaces import DatabaseConnection
from polysql.log import get_logger

logger = get_logger(__name__)


def create_database_engine(settings: Settings, echo: bool = False) -> Engine:
    """Create an SQLAlchemy engine for the configured database URL.

    Args:
        settings: Runtime settings
        echo: Enable SQL echo for debugging

    Returns:
        Configured engine
    """
    url = make_url(settings.database_url)
    logger.info(f"Creating database engine for: {url.render_as_string(hide_password=True)}")

    if url.get_backend_name() == "sqlite":
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def open_connection(settings: Settings) -> DatabaseConnection:
    """Open the execution handle matching the configured database URL.

    SQLite URLs use the standard library driver directly; every other backend
    goes through SQLAlchemy. The SQL dialect itself stays whatever
    ``settings.dialect`` names.

    Args:
        settings: Runtime settings

    Returns:
        Connected execution handle
    """
    url = make_url(settings.database_url)
    backend = url.get_backend_name()

    if dialect_from_name(backend) != settings.dialect_enum:
        logger.warning(
            f"Configured dialect {settings.dialect!r} does not match "
            f"database backend {backend!r}"
        )

    connection: SQLiteConnection | SQLAlchemyConnection
    if backend == "sqlite":
        connection = SQLiteConnection(url.database or MEMORY_DATABASE)
    else:
        connection = SQLAlchemyConnection(create_database_engine(settings))
    connection.connect()
    return connection
