"""YAML config loader, writer and dotted-key get/set."""

from pathlib import Path
from typing import Any

import yaml

from weatherapi.config.defaults import DEFAULT_FORECASTS
from weatherapi.config.schema import ApiConfig


def load_config(path: str | Path) -> ApiConfig:
    """Load and validate config from a YAML file.

    If no seed forecasts are specified in the YAML, injects DEFAULT_FORECASTS.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not raw.get("seed"):
        raw["seed"] = [s.model_dump() for s in DEFAULT_FORECASTS]

    return ApiConfig(**raw)


def save_config(config: ApiConfig, path: str | Path) -> None:
    """Write config back as YAML, keeping the previous file as *.yaml.bak."""
    path = Path(path)
    if path.exists():
        path.with_suffix(".yaml.bak").write_text(path.read_text())
    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)


def get_config_value(config: ApiConfig, dotted_key: str) -> Any:
    """Look up e.g. 'database.max_retries' or 'seed.0.summary'."""
    data = config.model_dump(mode="json")
    *parents, leaf = dotted_key.split(".")
    container = _descend(data, parents, dotted_key)
    return _child(container, leaf, dotted_key)


def set_config_value(config: ApiConfig, dotted_key: str, value: Any) -> ApiConfig:
    """Return a re-validated copy of config with dotted_key set to value.

    String values are coerced to the type of the value they replace.
    """
    data = config.model_dump(mode="json")
    *parents, leaf = dotted_key.split(".")
    container = _descend(data, parents, dotted_key)
    current = _child(container, leaf, dotted_key)
    if isinstance(value, str) and type(current) in (int, float):
        value = type(current)(value)
    if isinstance(container, list):
        container[int(leaf)] = value
    else:
        container[leaf] = value
    return ApiConfig(**data)


def _descend(data: Any, parts: list[str], dotted_key: str) -> Any:
    for part in parts:
        data = _child(data, part, dotted_key)
    return data


def _child(node: Any, part: str, dotted_key: str) -> Any:
    try:
        return node[int(part)] if isinstance(node, list) else node[part]
    except (KeyError, IndexError, ValueError, TypeError):
        raise KeyError(f"Config key not found: {dotted_key}") from None
