"""Initial schema: weather forecasts keyed by calendar date."""

import sqlite3

DDL = [
    """
    CREATE TABLE IF NOT EXISTS weather_forecasts (
        date TEXT PRIMARY KEY,
        temperature_c INTEGER NOT NULL,
        summary TEXT,
        updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
