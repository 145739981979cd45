"""Repository for weather forecast records."""

import sqlite3
from datetime import date

from weatherapi.models.forecast import ForecastRecord


def save_forecast(conn: sqlite3.Connection, record: ForecastRecord) -> None:
    """Insert or replace the forecast for record.date."""
    conn.execute(
        "INSERT INTO weather_forecasts (date, temperature_c, summary, updated_at) "
        "VALUES (?, ?, ?, CURRENT_TIMESTAMP) "
        "ON CONFLICT(date) DO UPDATE SET "
        "temperature_c = excluded.temperature_c, summary = excluded.summary, "
        "updated_at = CURRENT_TIMESTAMP",
        (record.date.isoformat(), record.temperature_c, record.summary),
    )
    conn.commit()


def get_all_forecasts(conn: sqlite3.Connection) -> list[ForecastRecord]:
    """Get every stored forecast, oldest date first."""
    rows = conn.execute(
        "SELECT date, temperature_c, summary FROM weather_forecasts ORDER BY date"
    ).fetchall()
    return [_row_to_record(r) for r in rows]


def get_forecast_by_date(
    conn: sqlite3.Connection, target_date: date
) -> ForecastRecord | None:
    """Get the forecast for exactly target_date."""
    row = conn.execute(
        "SELECT date, temperature_c, summary FROM weather_forecasts WHERE date = ?",
        (target_date.isoformat(),),
    ).fetchone()
    if row is None:
        return None
    return _row_to_record(row)


def count_forecasts(conn: sqlite3.Connection) -> int:
    return conn.execute("SELECT COUNT(*) FROM weather_forecasts").fetchone()[0]


def delete_all_forecasts(conn: sqlite3.Connection) -> int:
    """Delete every forecast. Returns the number of rows removed."""
    cursor = conn.execute("DELETE FROM weather_forecasts")
    conn.commit()
    return cursor.rowcount


def _row_to_record(row: sqlite3.Row) -> ForecastRecord:
    return ForecastRecord(
        date=date.fromisoformat(row["date"]),
        temperature_c=row["temperature_c"],
        summary=row["summary"],
    )
