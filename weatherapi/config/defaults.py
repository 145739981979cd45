"""Default seed forecasts written by `weatherapi seed`."""

from datetime import date

from weatherapi.config.schema import SeedForecast

DEFAULT_FORECASTS: list[SeedForecast] = [
    SeedForecast(date=date(2023, 1, 1), temperature_c=-7, summary="Freezing"),
    SeedForecast(date=date(2023, 1, 2), temperature_c=2, summary="Bracing"),
    SeedForecast(date=date(2023, 5, 3), temperature_c=17, summary="Chilly"),
]
