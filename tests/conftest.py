"""
Pytest configuration for Cargo Ledger.

Provides fixtures for:
- In-memory services for unit tests
- Database connection management and table cleanup for integration tests
- Settings override for integration tests
"""

from __future__ import annotations

import os
from typing import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from cargo_ledger.bootstrap import Services, build_memory_services, build_postgres_services
from cargo_ledger.config import Settings
from cargo_ledger.infrastructure.db_factory import build_dsn
from cargo_ledger.infrastructure.schema import ensure_schema


@pytest.fixture
def memory_services() -> Services:
    """Fresh ship and container services over empty in-memory stores."""
    return build_memory_services()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "cargo_ledger"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return build_dsn(test_settings)


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection with the schema ensured.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        ensure_schema(conn)
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_pool(test_dsn: str, db_connection: psycopg.Connection) -> Generator[ConnectionPool, None, None]:
    """Session-scoped pool shared by the PostgreSQL stores under test."""
    pool = ConnectionPool(conninfo=test_dsn, min_size=1, max_size=4, open=True)
    try:
        pool.wait(timeout=10)
        yield pool
    finally:
        pool.close()


@pytest.fixture(scope="function")
def clean_tables(db_connection: psycopg.Connection):
    """
    Empty the ledger tables before and after each test function.

    Identities restart so tests can reason about fresh ids.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.ships, public.containers RESTART IDENTITY;")
    db_connection.commit()
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.ships, public.containers RESTART IDENTITY;")
    db_connection.commit()


@pytest.fixture(scope="function")
def postgres_services(
    db_pool: ConnectionPool, test_settings: Settings, clean_tables
) -> Services:
    """Services wired to PostgreSQL stores over clean tables."""
    return build_postgres_services(test_settings, pool=db_pool)
