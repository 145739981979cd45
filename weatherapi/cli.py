"""CLI entry point for the weather forecast API."""

import argparse
import logging
import sqlite3

from weatherapi.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from weatherapi.config.schema import ApiConfig
from weatherapi.models.forecast import SUMMARIES, ForecastRecord, InvalidDateError
from weatherapi.service.forecast_service import ForecastQueryService
from weatherapi.storage import forecast_repo
from weatherapi.storage.forecast_store import (
    SqliteForecastStore,
    StoreUnavailableError,
    open_store_connection,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherapi",
        description="Weather forecast web API",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None, help="Bind address")
    serve_p.add_argument("--port", type=int, default=None, help="Bind port")

    # seed
    seed_p = sub.add_parser("seed", help="Write seed forecasts to the database")
    seed_p.add_argument(
        "--clear", action="store_true", help="Delete existing forecasts first"
    )

    # list / get
    sub.add_parser("list", help="Show all forecasts")
    get_p = sub.add_parser("get", help="Show the forecast for one date")
    get_p.add_argument("date", help="Date as YYYY-MM-DD")

    # health
    sub.add_parser("health", help="Run health checks")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    file_config = load_config(args.config)
    config = file_config
    if args.db:
        config = config.model_copy(
            update={"database": config.database.model_copy(update={"path": args.db})}
        )

    logging.basicConfig(
        level=config.logging.level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "seed":
        return _cmd_seed(config, args)
    elif args.command == "list":
        return _cmd_list(config)
    elif args.command == "get":
        return _cmd_get(config, args)
    elif args.command == "health":
        return _cmd_health(config)
    elif args.command == "config":
        return _cmd_config(file_config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config: ApiConfig, args) -> int:
    import uvicorn

    from weatherapi.api import create_app

    host = config.server.host if args.host is None else args.host
    port = config.server.port if args.port is None else args.port
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def _cmd_seed(config: ApiConfig, args) -> int:
    try:
        conn = open_store_connection(config.database.path)
    except StoreUnavailableError as e:
        print(f"Error: {e}")
        return 1
    try:
        if args.clear:
            removed = forecast_repo.delete_all_forecasts(conn)
            logger.info("Cleared %d forecasts", removed)
        for seed in config.seed:
            if seed.summary is not None and seed.summary not in SUMMARIES:
                logger.warning("Unknown summary %r for %s", seed.summary, seed.date)
            forecast_repo.save_forecast(
                conn,
                ForecastRecord(
                    date=seed.date, temperature_c=seed.temperature_c, summary=seed.summary
                ),
            )
        total = forecast_repo.count_forecasts(conn)
    finally:
        conn.close()

    print(f"Seeded {len(config.seed)} forecasts ({total} total)")
    return 0


def _cmd_list(config: ApiConfig) -> int:
    try:
        conn = open_store_connection(config.database.path)
        try:
            records = _service(config, conn).list_forecasts()
        finally:
            conn.close()
    except StoreUnavailableError as e:
        print(f"Error: {e}")
        return 1

    print(f"{len(records)} forecasts")
    for r in records:
        print(f"  {_format_record(r)}")
    return 0


def _cmd_get(config: ApiConfig, args) -> int:
    try:
        conn = open_store_connection(config.database.path)
        try:
            record = _service(config, conn).get_forecast_by_date(args.date)
        finally:
            conn.close()
    except (InvalidDateError, StoreUnavailableError) as e:
        print(f"Error: {e}")
        return 1

    if record is None:
        print(f"No forecast for {args.date}")
    else:
        print(_format_record(record))
    return 0


def _cmd_health(config: ApiConfig) -> int:
    try:
        conn = open_store_connection(config.database.path)
        try:
            count = forecast_repo.count_forecasts(conn)
        finally:
            conn.close()
    except (StoreUnavailableError, sqlite3.Error) as e:
        print("DB: FAIL")
        print(f"Error: {e}")
        return 1

    print("DB: OK")
    print(f"Path: {config.database.path}")
    print(f"Forecasts: {count}")
    return 0


def _cmd_config(config: ApiConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        key, sep, value = args.keyvalue.partition("=")
        if not sep:
            print("Error: use key=value format")
            return 1
        key = key.strip()
        try:
            new_config = set_config_value(config, key, value.strip())
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key)}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _service(config: ApiConfig, conn: sqlite3.Connection) -> ForecastQueryService:
    store = SqliteForecastStore(
        conn,
        max_retries=config.database.max_retries,
        retry_base_delay=config.database.retry_base_delay,
    )
    return ForecastQueryService(store)


def _format_record(r: ForecastRecord) -> str:
    return (
        f"{r.date.isoformat()}  {r.temperature_c:>4}C {r.temperature_f:>4}F  "
        f"{r.summary or '-'}"
    )
