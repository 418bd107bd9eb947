"""
PostgreSQL connectivity for Cargo Ledger.

One process-wide pool is shared by the ship and container stores and closed
at exit. Connection attempts are retried with tenacity; batch validation
failures never pass through here and are never retried.
"""

from __future__ import annotations

import atexit
import threading
from typing import Optional

import psycopg
from psycopg import Connection
from psycopg_pool import ConnectionPool, PoolTimeout
from tenacity import (
    Retrying,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cargo_ledger.config import Settings, get_settings
from cargo_ledger.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    settings = settings or get_settings()
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
    )


class PoolManager:
    """
    Process-wide owner of the ledger's connection pool.

    The first `get_sync_pool` call creates the pool; later calls return it
    unchanged. `close_all` runs at interpreter exit.
    """

    _instance: Optional["PoolManager"] = None
    _lock = threading.Lock()
    _sync_pool: Optional[ConnectionPool]

    def __new__(cls) -> "PoolManager":
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._sync_pool = None
                atexit.register(cls._instance.close_all)
            return cls._instance

    def get_sync_pool(
        self,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
        dsn: Optional[str] = None,
    ) -> ConnectionPool:
        """
        Get or create the ledger pool.

        Parameters
        ----------
        min_size, max_size : int | None
            Pool bounds; default to `DB_POOL_MIN_SIZE` / `DB_POOL_MAX_SIZE`.
        dsn : str | None
            Connection string override; defaults to `build_dsn()`.
        """
        with self._lock:
            if self._sync_pool is None:
                settings = get_settings()
                self._sync_pool = ConnectionPool(
                    conninfo=dsn or build_dsn(settings),
                    min_size=min_size or settings.db_pool_min_size,
                    max_size=max_size or settings.db_pool_max_size,
                    open=True,
                )
                log.debug("Connection pool created", extra={"db": settings.db_name})
            return self._sync_pool

    def close_all(self) -> None:
        with self._lock:
            if self._sync_pool is not None:
                try:
                    self._sync_pool.close()
                except psycopg.Error as exc:
                    log.warning("Failed to close connection pool", extra={"error": str(exc)})
                finally:
                    self._sync_pool = None


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn: Optional[str] = None) -> Connection:
    """
    Open a dedicated connection for one-off work such as `init-db`.

    Raises `psycopg.OperationalError` after three failed attempts.
    """
    return psycopg.connect(dsn or build_dsn())


def wait_for_pool(pool: ConnectionPool, settings: Optional[Settings] = None) -> None:
    """
    Block until the pool holds at least `min_size` connections.

    `PoolTimeout` is retried with exponential backoff until
    `db_connect_attempts` is reached, then re-raised.
    """
    settings = settings or get_settings()
    for attempt in Retrying(
        stop=stop_after_attempt(settings.db_connect_attempts),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(PoolTimeout),
        reraise=True,
    ):
        with attempt:
            log.debug(
                "Waiting for connection pool",
                extra={"attempt": attempt.retry_state.attempt_number},
            )
            pool.wait(timeout=settings.db_connect_timeout_seconds)


__all__ = [
    "PoolManager",
    "build_dsn",
    "get_sync_connection",
    "wait_for_pool",
]
