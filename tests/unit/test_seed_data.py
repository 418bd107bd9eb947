from __future__ import annotations

from rich.console import Console

from cargo_ledger.bootstrap import build_memory_services
from cargo_ledger.domain.models import Container, Ship
from cargo_ledger.reporter import _format_cell, build_records_table, print_records
from scripts import seed_data

EXPECTED_SHIPS = 7
EXPECTED_CONTAINERS = 11


def test_generated_records_are_deterministic_and_valid():
    first = seed_data._generate_ships(5, seed=123)
    second = seed_data._generate_ships(5, seed=123)

    assert first == second
    assert all(ship.is_transient and ship.tonnage > 0 for ship in first)
    assert all(c.weight > 0 for c in seed_data._generate_containers(5, seed=123))


def test_seed_loads_records_in_batches():
    services = build_memory_services()

    counts = seed_data.seed(
        services, ships=EXPECTED_SHIPS, containers=EXPECTED_CONTAINERS, batch_size=3, rng_seed=1
    )

    assert counts == {"ships": EXPECTED_SHIPS, "containers": EXPECTED_CONTAINERS}
    assert len(services.ships.get_all()) == EXPECTED_SHIPS
    assert len(services.containers.get_all()) == EXPECTED_CONTAINERS


def test_records_table_has_model_columns():
    table = build_records_table([Ship(id=1, name="Titanic", tonnage=100_000.0)], "Ships")

    assert [column.header for column in table.columns] == ["id", "name", "tonnage"]
    assert table.row_count == 1


def test_print_records_renders_values():
    console = Console(record=True, width=120)

    print_records([Container(id=3, contents="toys", weight=5.0)], "Containers", console=console)

    text = console.export_text()
    assert "toys" in text
    assert "5.0" in text
    assert "1 record(s)" in text


def test_tiny_positive_values_do_not_render_as_zero():
    assert _format_cell(0.001) == "0.001"
    assert _format_cell(5e-324) == "5e-324"
    assert _format_cell(100_000.0) == "100,000.0"

    console = Console(record=True, width=120)
    print_records([Ship(id=1, name="x", tonnage=0.001)], "Ships", console=console)

    text = console.export_text()
    assert "0.001" in text
    assert "0.00 " not in text
