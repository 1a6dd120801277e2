"""Configuration — frozen dataclass from defaults, optional YAML file and environment."""

import math
import os
from dataclasses import dataclass, replace

import yaml

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
OUTPUT_FORMATS = ("text", "json")
DIMENSIONS = ("country", "os", "browser")


@dataclass(frozen=True)
class Config:
    log_file: str = "Resources/apache_log.txt"
    geoip_db: str = "Resources/GeoLite2-Country.mmdb"
    threshold: float = 1.0
    output_format: str = "text"
    log_level: str = "WARNING"
    dimensions: tuple = DIMENSIONS


def _parse_dimensions(value) -> tuple:
    if isinstance(value, str):
        value = value.split(",")
    dims = tuple(d.strip().lower() for d in value if d and d.strip())
    unknown = [d for d in dims if d not in DIMENSIONS]
    if unknown:
        raise ValueError(f"Unknown dimension(s): {', '.join(unknown)}")
    if not dims:
        raise ValueError("At least one dimension is required")
    return dims


def _parse_threshold(value) -> float:
    try:
        threshold = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid threshold: {value!r}")
    if not math.isfinite(threshold) or threshold < 0:
        raise ValueError(f"Threshold must be a non-negative number, got {threshold}")
    return threshold


def validate(config: Config) -> Config:
    """Normalize and check field values, returning a new Config."""
    output_format = config.output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Invalid output format: {config.output_format!r}")
    log_level = config.log_level.upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level: {config.log_level!r}")
    return replace(
        config,
        threshold=_parse_threshold(config.threshold),
        output_format=output_format,
        log_level=log_level,
        dimensions=_parse_dimensions(config.dimensions),
    )


def load_yaml(path: str) -> dict:
    """Load a YAML mapping from *path*; a missing file yields an empty dict."""
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(config_path: str | None = None, **overrides) -> Config:
    """Build Config: dataclass defaults, then YAML file, then env vars, then overrides.

    ``config_path`` falls back to the ``CONFIG_PATH`` environment variable.
    Overrides whose value is None are ignored so argparse defaults can be
    passed straight through.
    """
    config_path = config_path or os.environ.get("CONFIG_PATH")
    file_values = load_yaml(config_path) if config_path else {}

    known = {"log_file", "geoip_db", "threshold", "output_format", "log_level", "dimensions"}
    unexpected = set(file_values) - known
    if unexpected:
        raise ValueError(f"Unknown config key(s): {', '.join(sorted(unexpected))}")

    config = replace(Config(), **file_values)

    env = {
        "log_file": os.environ.get("ACCESS_LOG_FILE"),
        "geoip_db": os.environ.get("GEOIP_DB_PATH"),
        "threshold": os.environ.get("REPORT_THRESHOLD"),
        "output_format": os.environ.get("REPORT_FORMAT"),
        "log_level": os.environ.get("LOG_LEVEL"),
        "dimensions": os.environ.get("REPORT_DIMENSIONS"),
    }
    config = replace(config, **{k: v for k, v in env.items() if v is not None})
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    return validate(config)
