"""Weather forecast record and date parsing."""

import re
from dataclasses import dataclass
from datetime import date

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

SUMMARIES: tuple[str, ...] = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)


class InvalidDateError(ValueError):
    """Raised when a forecast date is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, value: object):
        super().__init__(f"Invalid forecast date: {value!r} (expected YYYY-MM-DD)")
        self.value = value


@dataclass(frozen=True)
class ForecastRecord:
    date: date
    temperature_c: int
    summary: str | None = None

    @property
    def temperature_f(self) -> int:
        # int() truncates toward zero
        return 32 + int(self.temperature_c * 9 / 5)


def parse_forecast_date(value: str | date) -> date:
    """Parse an ISO calendar date. Raises InvalidDateError on anything else."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise InvalidDateError(value)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateError(value) from e
