"""
Service wiring for Cargo Ledger.

Builds the ship and container services over either the PostgreSQL stores
(sharing one pool) or fresh in-memory stores.

Usage:
    from cargo_ledger.bootstrap import build_services

    services = build_services("memory")
    services.ships.add_all([Ship(name="Titanic", tonnage=100_000)])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from psycopg_pool import ConnectionPool

from cargo_ledger.config import Settings, get_settings
from cargo_ledger.infrastructure.db_factory import PoolManager, build_dsn, wait_for_pool
from cargo_ledger.infrastructure.schema import CONTAINERS, SHIPS
from cargo_ledger.repositories.memory import InMemoryRecordStore
from cargo_ledger.repositories.postgres import PostgresRecordStore
from cargo_ledger.services.batch import ContainerService, ShipService


@dataclass(frozen=True)
class Services:
    ships: ShipService
    containers: ContainerService


def build_postgres_services(
    settings: Optional[Settings] = None, pool: Optional[ConnectionPool] = None
) -> Services:
    """
    Wire both services to PostgreSQL stores sharing one connection pool.

    When `pool` is None the PoolManager singleton's pool is used and waited on
    (with retry) until it can hand out connections.
    """
    settings = settings or get_settings()
    if pool is None:
        pool = PoolManager().get_sync_pool(
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            dsn=build_dsn(settings),
        )
        wait_for_pool(pool, settings)
    return Services(
        ships=ShipService(PostgresRecordStore(pool, SHIPS)),
        containers=ContainerService(PostgresRecordStore(pool, CONTAINERS)),
    )


def build_memory_services() -> Services:
    """Wire both services to fresh, empty in-memory stores."""
    return Services(
        ships=ShipService(InMemoryRecordStore(SHIPS.kind)),
        containers=ContainerService(InMemoryRecordStore(CONTAINERS.kind)),
    )


def _backend_factories() -> Dict[str, Callable[[], Services]]:
    """Registry of available storage backends."""
    return {
        "postgres": lambda: build_postgres_services(),
        "memory": build_memory_services,
    }


def available_backends() -> List[str]:
    """List available backend names."""
    return sorted(_backend_factories().keys())


def build_services(backend: str = "postgres") -> Services:
    factories = _backend_factories()
    if backend not in factories:
        raise ValueError(f"Unknown backend '{backend}'. Available: {', '.join(factories)}")
    return factories[backend]()


__all__ = [
    "Services",
    "available_backends",
    "build_memory_services",
    "build_postgres_services",
    "build_services",
]
