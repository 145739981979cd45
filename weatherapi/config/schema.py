"""Pydantic v2 configuration schema with strict validation."""

import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)


class DatabaseConfig(BaseModel):
    model_config = {"extra": "forbid"}

    path: str = "data/weather.db"
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=0.1, ge=0.0)


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: LogLevel = LogLevel.INFO


class SeedForecast(BaseModel):
    model_config = {"extra": "forbid"}

    date: datetime.date
    temperature_c: int = Field(ge=-100, le=100)
    summary: str | None = None


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    server: ServerConfig = ServerConfig()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    seed: list[SeedForecast] = []
