import pytest

from cargo_ledger import config
from cargo_ledger.bootstrap import Services, available_backends, build_services
from cargo_ledger.infrastructure.db_factory import build_dsn


def test_get_settings_defaults():
    settings = config.get_settings()
    assert settings.db_host == "localhost"
    assert settings.db_port == 5432
    assert settings.db_user == "postgres"
    assert settings.db_name == "cargo_ledger"
    assert settings.db_pool_min_size > 0
    assert settings.db_pool_max_size >= settings.db_pool_min_size
    assert settings.db_connect_attempts > 0


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("LOG_JSON", "true")
    settings = config.Settings()
    assert settings.db_host == "db.internal"
    assert settings.db_port == 6543
    assert settings.log_json is True


def test_build_dsn_from_settings():
    settings = config.Settings(
        db_host="h", db_port=1, db_user="u", db_password="p", db_name="n"
    )
    assert build_dsn(settings) == "postgresql://u:p@h:1/n"


def test_available_backends_contains_known_entries():
    names = available_backends()
    assert names == ["memory", "postgres"]


def test_build_services_memory_backend_returns_fresh_stores():
    first = build_services("memory")
    second = build_services("memory")
    assert isinstance(first, Services)
    assert first.ships.kind == "ship"
    assert first.containers.kind == "container"
    assert first.ships is not second.ships


def test_build_services_rejects_unknown_backend():
    with pytest.raises(ValueError, match="Unknown backend"):
        build_services("sqlite")
