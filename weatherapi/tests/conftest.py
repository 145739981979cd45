"""Shared test fixtures."""

import sqlite3
from pathlib import Path

import pytest
import yaml

from weatherapi.config.defaults import DEFAULT_FORECASTS
from weatherapi.config.schema import ApiConfig, DatabaseConfig
from weatherapi.models.forecast import ForecastRecord
from weatherapi.storage import forecast_repo
from weatherapi.storage.database import connect, run_migrations


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def db(db_path: Path) -> sqlite3.Connection:
    """Migrated, empty database."""
    conn = connect(db_path)
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def seeded_db(db: sqlite3.Connection) -> sqlite3.Connection:
    """Database holding the three default forecasts."""
    for seed in DEFAULT_FORECASTS:
        forecast_repo.save_forecast(
            db,
            ForecastRecord(
                date=seed.date, temperature_c=seed.temperature_c, summary=seed.summary
            ),
        )
    return db


@pytest.fixture
def default_config(db_path: Path) -> ApiConfig:
    """Default ApiConfig pointing at the temporary database, with fast retries."""
    return ApiConfig(
        database=DatabaseConfig(path=str(db_path), retry_base_delay=0.0),
        seed=DEFAULT_FORECASTS,
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "server": {"port": 8080},
        "database": {"path": str(tmp_path / "test.db"), "max_retries": 2},
        "logging": {"level": "WARNING"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
