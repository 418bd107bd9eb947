from __future__ import annotations

import sys
from typing import List, NoReturn, Tuple

import typer

from cargo_ledger.bootstrap import Services, available_backends, build_services
from cargo_ledger.config import get_settings
from cargo_ledger.domain.errors import CargoLedgerError, InvalidTonnage
from cargo_ledger.domain.models import Container, Ship
from cargo_ledger.infrastructure.db_factory import build_dsn, get_sync_connection
from cargo_ledger.infrastructure.schema import ensure_schema
from cargo_ledger.reporter import print_records
from cargo_ledger.utils.logging import configure_logging

app = typer.Typer(help="Cargo Ledger CLI: all-or-nothing batches of ships and containers.")


@app.callback()
def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _parse_pair(raw: str) -> Tuple[str, float]:
    """Split `LABEL=NUMBER`; the last `=` separates the number."""
    label, sep, number = raw.rpartition("=")
    if not sep or not label:
        raise typer.BadParameter(f"expected LABEL=NUMBER, got {raw!r}")
    try:
        return label, float(number)
    except ValueError:
        raise typer.BadParameter(f"{number!r} is not a number (in {raw!r})") from None


def _fail(exc: CargoLedgerError) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"pool=({settings.db_pool_min_size},{settings.db_pool_max_size}) "
        f"env={settings.app_env} log_level={settings.log_level}"
    )


@app.command("init-db")
def init_db() -> None:
    """
    Create the ships and containers tables if they do not exist.
    """
    with get_sync_connection(build_dsn()) as conn:
        ensure_schema(conn)
    typer.echo("Schema ready.")


@app.command("add-ships")
def add_ships(
    ships: List[str] = typer.Argument(..., metavar="NAME=TONNAGE", help="Ships to add as one batch."),
) -> None:
    """
    Persist ships as one batch; nothing is stored if any tonnage is <= 0.
    """
    batch = [Ship(name=name, tonnage=tonnage) for name, tonnage in map(_parse_pair, ships)]
    try:
        persisted = build_services().ships.add_all(batch)
    except CargoLedgerError as exc:
        _fail(exc)
    print_records(persisted, "Ships")


@app.command("add-containers")
def add_containers(
    containers: List[str] = typer.Argument(
        ..., metavar="CONTENTS=WEIGHT", help="Containers to add as one batch."
    ),
) -> None:
    """
    Persist containers as one batch; nothing is stored if any weight is <= 0.
    """
    batch = [
        Container(contents=contents, weight=weight)
        for contents, weight in map(_parse_pair, containers)
    ]
    try:
        persisted = build_services().containers.add_all(batch)
    except CargoLedgerError as exc:
        _fail(exc)
    print_records(persisted, "Containers")


@app.command("list-ships")
def list_ships() -> None:
    """List every stored ship."""
    print_records(build_services().ships.get_all(), "Ships")


@app.command("list-containers")
def list_containers() -> None:
    """List every stored container."""
    print_records(build_services().containers.get_all(), "Containers")


@app.command("get-ship")
def get_ship(ship_id: int = typer.Argument(..., help="Ship identity.")) -> None:
    """Show one ship by identity."""
    try:
        ship = build_services().ships.get_by_id(ship_id)
    except CargoLedgerError as exc:
        _fail(exc)
    print_records([ship], "Ships")


@app.command("get-container")
def get_container(container_id: int = typer.Argument(..., help="Container identity.")) -> None:
    """Show one container by identity."""
    try:
        container = build_services().containers.get_by_id(container_id)
    except CargoLedgerError as exc:
        _fail(exc)
    print_records([container], "Containers")


def run_demo(services: Services) -> None:
    """
    Store a valid container batch, then show a ship batch being rolled back.
    """
    containers = services.containers.add_all(
        [Container(contents="toys", weight=5), Container(contents="candy", weight=5)]
    )
    typer.echo(f"Stored {len(containers)} container(s).")
    print_records(services.containers.get_all(), "Containers")

    ships_before = len(services.ships.get_all())
    try:
        services.ships.add_all(
            [Ship(name="Titanic", tonnage=100_000), Ship(name="Ghost", tonnage=0)]
        )
    except InvalidTonnage as exc:
        typer.echo(f"Ship batch rejected: {exc}")
    new_ships = len(services.ships.get_all()) - ships_before
    typer.echo(f"Ships stored from rejected batch: {new_ships}")


@app.command()
def demo(
    backend: str = typer.Option(
        "postgres",
        "--backend",
        "-b",
        help=f"Storage backend ({', '.join(available_backends())}).",
    ),
) -> None:
    """
    Demonstrate the all-or-nothing rule on a fresh or existing store.
    """
    if backend == "postgres":
        with get_sync_connection(build_dsn()) as conn:
            ensure_schema(conn)
    try:
        services = build_services(backend)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--backend") from None
    run_demo(services)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
