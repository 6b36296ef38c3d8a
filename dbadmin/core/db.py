from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Connection, CursorResult
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from .config import settings
from ..models.base import SQLModel  # Import to access all models


def _engine_kwargs(url: str) -> dict:
    """Connection arguments for the configured backend."""
    if not url.startswith("sqlite"):
        return {}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    # In-memory databases live as long as their connection, share one
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


# Single engine instance (avoid recreating per request)
sync_engine = create_engine(settings.DATABASE_URL, echo=False, **_engine_kwargs(settings.DATABASE_URL))

SessionLocal = sessionmaker(sync_engine, class_=Session, expire_on_commit=False)


@contextmanager
def get_session() -> Session:
    """Yield a database session and always close it."""
    session: Session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def create_db_and_tables() -> None:
    """
    Create tables if they do not exist.
    Non-destructive: avoids dropping existing data.
    """
    SQLModel.metadata.create_all(sync_engine)


class DatabaseInterface:
    """
    Thin wrapper over a user connection for browsing arbitrary tables.

    Statements are plain SQL strings; callers quote identifiers with
    quote_identifier() and are responsible for any raw fragments they add.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.current_db: Optional[str] = None

    @property
    def dialect_name(self) -> str:
        return self.connection.dialect.name

    def quote_identifier(self, name: str) -> str:
        return self.connection.dialect.identifier_preparer.quote_identifier(name)

    def list_databases(self) -> list[str]:
        if self.dialect_name == "sqlite":
            rows = self.connection.exec_driver_sql("PRAGMA database_list").fetchall()
            return [row[1] for row in rows]
        return inspect(self.connection).get_schema_names()

    def database_exists(self, name: str) -> bool:
        return name in self.list_databases()

    def table_exists(self, db: str, table: str) -> bool:
        return inspect(self.connection).has_table(table, schema=db)

    def select_db(self, name: str) -> None:
        """Make `name` the default database for unqualified table names."""
        quoted = self.quote_identifier(name)
        if self.dialect_name in ("mysql", "mariadb"):
            self.connection.exec_driver_sql(f"USE {quoted}")
        elif self.dialect_name == "postgresql":
            self.connection.exec_driver_sql(f"SET search_path TO {quoted}")
        # SQLite has no USE; table_reference() qualifies the name instead
        self.current_db = name

    def table_reference(self, table: str) -> str:
        """Quoted table name; SQLite needs the database qualifier to pick an attached one."""
        if self.dialect_name == "sqlite" and self.current_db:
            return f"{self.quote_identifier(self.current_db)}.{self.quote_identifier(table)}"
        return self.quote_identifier(table)

    def query(self, sql: str) -> CursorResult:
        # Sent as-is: no bind parameter parsing of user supplied fragments
        return self.connection.exec_driver_sql(sql)

    @staticmethod
    def fetch_assoc(result: CursorResult) -> Optional[dict[str, Any]]:
        row = result.mappings().first()
        return dict(row) if row is not None else None


@contextmanager
def get_dbi() -> DatabaseInterface:
    """Yield a DatabaseInterface on a fresh connection and always close it."""
    with sync_engine.connect() as connection:
        yield DatabaseInterface(connection)
