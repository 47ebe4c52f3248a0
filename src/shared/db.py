"""Database plumbing: declarative base, engine construction, schema management.

SQLite is used for development and tests, PostgreSQL (psycopg2) in production.
On SQLite every transaction is opened with ``BEGIN IMMEDIATE`` so the write lock is
held from the first statement of a unit of work until commit or rollback; this is
what serializes checkout against concurrent cart writes on that backend. Other
backends rely on ``SELECT ... FOR UPDATE`` issued by the cart store.
"""

import importlib
import logging

from sqlalchemy import Engine, MetaData, create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

# Modules that declare mapped classes; imported before create_all/drop_all so every
# table is registered on the metadata.
MODEL_MODULES = (
    "catalogue.product.product",
    "identity.customer.user",
    "identity.customer.profile",
    "ordering.cart.cart",
    "ordering.order.order",
)


class Base(DeclarativeBase):
    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s",
        }
    )


def _configure_sqlite(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Hand transaction control to SQLAlchemy instead of pysqlite's implicit BEGIN
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(database_uri: str, echo: bool = False) -> Engine:
    if database_uri.startswith("sqlite"):
        engine = create_engine(
            database_uri,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        _configure_sqlite(engine)
        return engine

    return create_engine(database_uri, echo=echo, pool_pre_ping=True)


class Database:
    """Owns the engine and the session factory for one database."""

    def __init__(self, database_uri: str, echo: bool = False):
        self.database_uri = database_uri
        self.engine = create_db_engine(database_uri, echo=echo)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

        if not echo:
            logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def session(self) -> Session:
        return self._session_factory()

    def dispose(self) -> None:
        self.engine.dispose()


def _load_models() -> None:
    for module in MODEL_MODULES:
        importlib.import_module(module)


def setup_db(database: Database) -> None:
    """Create all tables."""
    _load_models()
    Base.metadata.create_all(database.engine)


def drop_db(database: Database) -> None:
    """Drop all tables."""
    _load_models()
    Base.metadata.drop_all(database.engine)
