"""
Sample data generation and loading script for Cargo Ledger.

Implements deterministic pseudo-random ship and container batches and loads
them through the services, so every seeded batch goes through the same
validation and transaction as any other caller.
"""

from __future__ import annotations

import random
from typing import List

import typer

from cargo_ledger.bootstrap import Services, build_services
from cargo_ledger.config import get_settings
from cargo_ledger.domain.models import Container, Ship
from cargo_ledger.utils.logging import configure_logging, get_logger

app = typer.Typer(help="Generate sample ships and containers and load them in batches.")
log = get_logger(__name__)

_SHIP_PREFIXES = ["Ever", "Maersk", "MSC", "Cosco", "Hapag"]
_SHIP_SUFFIXES = ["Given", "Alabama", "Gulsun", "Universe", "Express"]
_CONTENTS = ["toys", "candy", "coffee", "textiles", "electronics", "timber", "grain"]


def _generate_ships(count: int, seed: int) -> List[Ship]:
    rng = random.Random(seed)
    return [
        Ship(
            name=f"{rng.choice(_SHIP_PREFIXES)} {rng.choice(_SHIP_SUFFIXES)} {i + 1}",
            tonnage=round(rng.uniform(1_000, 250_000), 1),
        )
        for i in range(count)
    ]


def _generate_containers(count: int, seed: int) -> List[Container]:
    rng = random.Random(seed)
    return [
        Container(contents=rng.choice(_CONTENTS), weight=round(rng.uniform(0.5, 30.0), 2))
        for _ in range(count)
    ]


def _chunks(items: list, size: int) -> List[list]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def seed(services: Services, ships: int, containers: int, batch_size: int, rng_seed: int) -> dict:
    """
    Persist generated records in batches of `batch_size`.

    Returns
    -------
    dict
        Number of persisted ships and containers.
    """
    stored_ships = 0
    for batch in _chunks(_generate_ships(ships, rng_seed), batch_size):
        stored_ships += len(services.ships.add_all(batch))
    stored_containers = 0
    for batch in _chunks(_generate_containers(containers, rng_seed), batch_size):
        stored_containers += len(services.containers.add_all(batch))
    log.info(
        "Seeding complete",
        extra={"ships": stored_ships, "containers": stored_containers},
    )
    return {"ships": stored_ships, "containers": stored_containers}


@app.command()
def main(
    ships: int = typer.Option(10, "--ships", help="Number of ships to generate."),
    containers: int = typer.Option(25, "--containers", help="Number of containers to generate."),
    batch_size: int = typer.Option(5, "--batch-size", min=1, help="Records per batch."),
    seed_value: int = typer.Option(42, "--seed", help="Random seed for reproducibility."),
    backend: str = typer.Option("postgres", "--backend", help="Storage backend."),
) -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    counts = seed(build_services(backend), ships, containers, batch_size, seed_value)
    typer.echo(f"Seeded {counts['ships']} ship(s) and {counts['containers']} container(s).")


if __name__ == "__main__":
    app()
