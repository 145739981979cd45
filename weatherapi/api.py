"""Weather forecast web API: FastAPI application factory and routes."""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from weatherapi.config.schema import ApiConfig
from weatherapi.models.forecast import ForecastRecord, InvalidDateError
from weatherapi.service.forecast_service import ForecastQueryService
from weatherapi.storage import forecast_repo
from weatherapi.storage.forecast_store import (
    SqliteForecastStore,
    StoreUnavailableError,
    open_store_connection,
)

logger = logging.getLogger(__name__)


def create_app(config: ApiConfig | None = None) -> FastAPI:
    """Build the API for the database named in config.database."""
    config = config or ApiConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            open_store_connection(config.database.path).close()
        except StoreUnavailableError as e:
            # requests answer 503 until the database can be opened
            logger.error("Starting without a usable database: %s", e)
        else:
            logger.info("Serving forecasts from %s", config.database.path)
        yield

    app = FastAPI(title="Weather Forecast API", version="0.1.0", lifespan=lifespan)
    app.state.config = config

    app.add_exception_handler(InvalidDateError, _invalid_date_handler)
    app.add_exception_handler(StoreUnavailableError, _store_unavailable_handler)

    app.get("/weatherforecast")(list_forecasts)
    app.get("/weatherforecast/{date}")(get_forecast)
    app.get("/health")(get_health)
    return app


def get_connection(request: Request) -> Iterator[sqlite3.Connection]:
    """One connection per request, closed when the response is done."""
    conn = open_store_connection(request.app.state.config.database.path, migrate=False)
    try:
        yield conn
    finally:
        conn.close()


def get_service(
    request: Request, conn: sqlite3.Connection = Depends(get_connection)
) -> ForecastQueryService:
    db = request.app.state.config.database
    store = SqliteForecastStore(
        conn, max_retries=db.max_retries, retry_base_delay=db.retry_base_delay
    )
    return ForecastQueryService(store)


# ── Forecast endpoints ──────────────────────────────────────────


def list_forecasts(service: ForecastQueryService = Depends(get_service)):
    """All stored forecasts."""
    return [forecast_to_json(r) for r in service.list_forecasts()]


def get_forecast(date: str, service: ForecastQueryService = Depends(get_service)):
    """Forecast for one exact date; 204 with no body if there is none."""
    record = service.get_forecast_by_date(date)
    if record is None:
        return Response(status_code=204)
    return forecast_to_json(record)


def get_health(conn: sqlite3.Connection = Depends(get_connection)):
    """Quick health check."""
    try:
        count = forecast_repo.count_forecasts(conn)
    except sqlite3.Error as e:
        return {"db_ok": False, "error": str(e)}
    return {"db_ok": True, "forecast_count": count}


def forecast_to_json(record: ForecastRecord) -> dict:
    return {
        "date": record.date.isoformat(),
        "temperatureC": record.temperature_c,
        "temperatureF": record.temperature_f,
        "summary": record.summary,
    }


# ── Error mapping ───────────────────────────────────────────────


async def _invalid_date_handler(request: Request, exc: InvalidDateError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def _store_unavailable_handler(
    request: Request, exc: StoreUnavailableError
) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})
