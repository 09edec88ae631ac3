import logging
import os
from collections.abc import Generator
from typing import Any

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from phonecall_graph.exceptions import EnvNotFoundError
from phonecall_graph.orm.connection import DBConnection

logger = logging.getLogger("PhoneCall-Graph")

DEFAULT_POSTGRES_IMAGE = "postgres:16-alpine"


def _external_connection() -> DBConnection:
    """Build a connection to the server named by POSTGRES_* environment variables."""
    for env_var in ("POSTGRES_USER", "POSTGRES_PASSWORD"):
        if not os.getenv(env_var):
            raise EnvNotFoundError(env_var)
    conn = DBConnection.from_env()
    conn.database = os.getenv("TEST_DB_NAME", "phonecall_graph_test")
    return conn


@pytest.fixture(scope="session")
def db_connection() -> Generator[DBConnection, Any, None]:
    """Provision a throwaway PostgreSQL database for the test session.

    Uses the server from POSTGRES_HOST when it is set (CI service containers),
    otherwise starts a disposable container with testcontainers.
    The schema is created once; the database is discarded at teardown.
    """
    if os.getenv("POSTGRES_HOST"):
        conn = _external_connection()
        conn.create_database()
        conn.create_schema()
        yield conn
        conn.drop_database()
        return

    from testcontainers.postgres import PostgresContainer

    image = os.getenv("TEST_POSTGRES_IMAGE", DEFAULT_POSTGRES_IMAGE)
    with PostgresContainer(image, driver="psycopg") as postgres:
        conn = DBConnection(
            host=postgres.get_container_host_ip(),
            port=int(postgres.get_exposed_port(5432)),
            username=postgres.username,
            password=postgres.password,
            database=postgres.dbname,
        )
        logger.info(f"Started disposable PostgreSQL container at {conn.safe_db_url}")
        conn.create_schema()
        yield conn


@pytest.fixture(scope="session")
def db_engine(db_connection: DBConnection) -> Generator[Engine, Any, None]:
    """Pooled engine shared by every test in the session."""
    engine = db_connection.get_engine()

    yield engine

    engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine) -> Generator[sessionmaker[Session], Any, None]:
    """Session factory whose writes are discarded after each test.

    Sessions join an outer transaction on a dedicated connection. Their commits
    only release savepoints, and the outer transaction is rolled back at the end
    of the test so every test starts from empty tables.
    """
    connection = db_engine.connect()
    transaction = connection.begin()

    yield sessionmaker(bind=connection, join_transaction_mode="create_savepoint")

    transaction.rollback()
    connection.close()


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, Any, None]:
    """Create a new database session for each test."""
    session = session_factory()

    yield session

    session.close()
