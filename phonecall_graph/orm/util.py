"""Utility functions for database management in PhoneCall-Graph.

Administrative statements (CREATE/DROP DATABASE) cannot run inside a transaction,
so these helpers talk to the 'postgres' maintenance database directly through
psycopg with autocommit enabled.
"""

import logging

import psycopg
from psycopg import Connection, sql

logger = logging.getLogger("PhoneCall-Graph")


def _admin_connection(host: str, port: int, user: str, password: str) -> Connection:
    return psycopg.connect(
        host=host,
        port=port,
        user=user,
        password=password,
        dbname="postgres",
        autocommit=True,
    )


def _database_exists(conn: Connection, database: str) -> bool:
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1 FROM pg_database WHERE datname = %s", (database,))
        return cursor.fetchone() is not None


def create_database(
    host: str,
    user: str,
    password: str,
    database: str,
    port: int = 5432,
    template: str = "template0",
    encoding: str = "UTF8",
) -> bool:
    """Create a new PostgreSQL database.

    Args:
        host: PostgreSQL server host.
        user: PostgreSQL user with CREATE DATABASE privileges.
        password: User password.
        database: Name of the database to create.
        port: PostgreSQL server port (default: 5432).
        template: Template database to use (default: template0).
        encoding: Database encoding (default: UTF8).

    Returns:
        True if database was created, False if it already exists.

    Raises:
        psycopg.Error: If connection or creation fails.
    """
    with _admin_connection(host, port, user, password) as conn:
        if _database_exists(conn, database):
            logger.info(f"Database '{database}' already exists")
            return False

        with conn.cursor() as cursor:
            cursor.execute(
                sql.SQL("CREATE DATABASE {} ENCODING %s TEMPLATE {}").format(
                    sql.Identifier(database),
                    sql.Identifier(template),
                ),
                (encoding,),
            )

        logger.info(f"Database '{database}' created successfully")
        return True


def drop_database(
    host: str,
    user: str,
    password: str,
    database: str,
    port: int = 5432,
    force: bool = False,
) -> bool:
    """Drop a PostgreSQL database.

    Args:
        host: PostgreSQL server host.
        user: PostgreSQL user with DROP DATABASE privileges.
        password: User password.
        database: Name of the database to drop.
        port: PostgreSQL server port (default: 5432).
        force: If True, terminate all connections before dropping.

    Returns:
        True if database was dropped, False if it didn't exist.
    """
    with _admin_connection(host, port, user, password) as conn:
        if not _database_exists(conn, database):
            logger.info(f"Database '{database}' does not exist")
            return False

        if force:
            _terminate_backends(conn, database)

        with conn.cursor() as cursor:
            cursor.execute(sql.SQL("DROP DATABASE {}").format(sql.Identifier(database)))

        logger.info(f"Database '{database}' dropped successfully")
        return True


def terminate_connections(
    host: str,
    user: str,
    password: str,
    database: str,
    port: int = 5432,
) -> None:
    """Terminate every other backend connected to the given database."""
    with _admin_connection(host, port, user, password) as conn:
        _terminate_backends(conn, database)
    logger.info(f"Terminated all connections to database '{database}'.")


def _terminate_backends(conn: Connection, database: str) -> None:
    with conn.cursor() as cursor:
        cursor.execute(
            "SELECT pg_terminate_backend(pid) FROM pg_stat_activity WHERE datname = %s AND pid <> pg_backend_pid()",
            (database,),
        )
