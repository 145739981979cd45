"""Forecast query service: list all forecasts or look up a single date."""

import logging
from datetime import date

from weatherapi.models.forecast import ForecastRecord, parse_forecast_date
from weatherapi.storage.forecast_store import ForecastStore

logger = logging.getLogger(__name__)


class ForecastQueryService:
    """Read-only queries over a ForecastStore.

    The store is passed in at construction; retries and connection handling
    belong to the store, not to this service.
    """

    def __init__(self, store: ForecastStore):
        self.store = store

    def list_forecasts(self) -> list[ForecastRecord]:
        records = self.store.all()
        logger.debug("Listed %d forecasts", len(records))
        return records

    def get_forecast_by_date(self, value: str | date) -> ForecastRecord | None:
        """Return the forecast for exactly this date, or None if there is none.

        Raises InvalidDateError for malformed input before the store is queried.
        """
        target_date = parse_forecast_date(value)
        record = self.store.get(target_date)
        if record is None:
            logger.debug("No forecast for %s", target_date)
        return record
