"""Read-only forecast store backed by SQLite, with retry on transient errors."""

import logging
import sqlite3
import time
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Protocol, TypeVar

from weatherapi.models.forecast import ForecastRecord
from weatherapi.storage import forecast_repo
from weatherapi.storage.database import connect, run_migrations

logger = logging.getLogger(__name__)

T = TypeVar("T")

# sqlite3.OperationalError messages that clear up on their own
TRANSIENT_MARKERS = ("database is locked", "database is busy", "disk i/o error")


class StoreUnavailableError(Exception):
    """Raised when the forecast store cannot be read."""


def open_store_connection(db_path: str | Path, migrate: bool = True) -> sqlite3.Connection:
    """Connect (and optionally migrate), raising StoreUnavailableError on sqlite errors."""
    try:
        conn = connect(db_path)
    except (sqlite3.Error, OSError) as e:
        logger.error("Cannot open %s: %s", db_path, e)
        raise StoreUnavailableError(f"Forecast store unavailable: {e}") from e
    if migrate:
        try:
            run_migrations(conn)
        except sqlite3.Error as e:
            conn.close()
            logger.error("Cannot migrate %s: %s", db_path, e)
            raise StoreUnavailableError(f"Forecast store unavailable: {e}") from e
    return conn


class ForecastStore(Protocol):
    def all(self) -> list[ForecastRecord]: ...

    def get(self, target_date: date) -> ForecastRecord | None: ...


class SqliteForecastStore:
    def __init__(
        self,
        conn: sqlite3.Connection,
        max_retries: int = 3,
        retry_base_delay: float = 0.1,
    ):
        self.conn = conn
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay

    def all(self) -> list[ForecastRecord]:
        return self._with_retry("all", lambda: forecast_repo.get_all_forecasts(self.conn))

    def get(self, target_date: date) -> ForecastRecord | None:
        return self._with_retry(
            f"get {target_date}",
            lambda: forecast_repo.get_forecast_by_date(self.conn, target_date),
        )

    def _with_retry(self, op: str, fn: Callable[[], T]) -> T:
        """Run fn, retrying transient OperationalErrors with exponential backoff."""
        for attempt in range(self.max_retries + 1):
            try:
                return fn()
            except sqlite3.OperationalError as e:
                if _is_transient(e) and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Store %s failed (%s), retrying in %.2fs (attempt %d/%d)",
                        op, e, delay, attempt + 1, self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                logger.error("Store %s failed: %s", op, e)
                raise StoreUnavailableError(f"Forecast store unavailable: {e}") from e
            except sqlite3.Error as e:
                logger.error("Store %s failed: %s", op, e)
                raise StoreUnavailableError(f"Forecast store unavailable: {e}") from e
        raise AssertionError("unreachable")


def _is_transient(error: sqlite3.OperationalError) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)
