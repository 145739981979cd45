"""Tests for the forecast query service."""

import sqlite3
from datetime import date

import pytest

from weatherapi.models.forecast import ForecastRecord, InvalidDateError
from weatherapi.service.forecast_service import ForecastQueryService
from weatherapi.storage.forecast_store import SqliteForecastStore, StoreUnavailableError


class FakeStore:
    """In-memory store that records the dates it was asked for."""

    def __init__(self, records: list[ForecastRecord]):
        self.records = {r.date: r for r in records}
        self.lookups: list[date] = []

    def all(self) -> list[ForecastRecord]:
        return list(self.records.values())

    def get(self, target_date: date) -> ForecastRecord | None:
        self.lookups.append(target_date)
        return self.records.get(target_date)


class FailingStore:
    def all(self):
        raise StoreUnavailableError("down")

    def get(self, target_date):
        raise StoreUnavailableError("down")


SEED = [
    ForecastRecord(date=date(2023, 1, 1), temperature_c=-7, summary="Freezing"),
    ForecastRecord(date=date(2023, 1, 2), temperature_c=2, summary="Bracing"),
    ForecastRecord(date=date(2023, 5, 3), temperature_c=17, summary="Chilly"),
]


class TestListForecasts:
    def test_every_record_once(self):
        service = ForecastQueryService(FakeStore(SEED))
        result = service.list_forecasts()
        assert len(result) == len(SEED)
        assert set(result) == set(SEED)

    def test_empty_store(self):
        assert ForecastQueryService(FakeStore([])).list_forecasts() == []

    def test_store_failure_propagates(self):
        with pytest.raises(StoreUnavailableError):
            ForecastQueryService(FailingStore()).list_forecasts()


class TestGetForecastByDate:
    @pytest.mark.parametrize("record", SEED, ids=lambda r: r.date.isoformat())
    def test_found_returns_fields_unchanged(self, record: ForecastRecord):
        service = ForecastQueryService(FakeStore(SEED))
        found = service.get_forecast_by_date(record.date.isoformat())
        assert found == record

    @pytest.mark.parametrize("value", ["2020-01-01", "2023-01-03", "2024-01-02"])
    def test_absent_returns_none(self, value: str):
        service = ForecastQueryService(FakeStore(SEED))
        assert service.get_forecast_by_date(value) is None

    def test_accepts_date_object(self):
        service = ForecastQueryService(FakeStore(SEED))
        found = service.get_forecast_by_date(date(2023, 1, 2))
        assert found is not None
        assert found.summary == "Bracing"

    def test_invalid_date_rejected_before_store(self):
        store = FakeStore(SEED)
        service = ForecastQueryService(store)
        with pytest.raises(InvalidDateError):
            service.get_forecast_by_date("2023-02-30")
        assert store.lookups == []

    def test_store_failure_propagates(self):
        with pytest.raises(StoreUnavailableError):
            ForecastQueryService(FailingStore()).get_forecast_by_date("2023-01-02")


class TestWithSqliteStore:
    def test_scenario_lookup(self, seeded_db: sqlite3.Connection):
        service = ForecastQueryService(SqliteForecastStore(seeded_db))
        found = service.get_forecast_by_date("2023-01-02")
        assert found == ForecastRecord(
            date=date(2023, 1, 2), temperature_c=2, summary="Bracing"
        )
        assert service.get_forecast_by_date("2020-01-01") is None
        assert len(service.list_forecasts()) == 3
