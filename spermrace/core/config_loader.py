"""Top-level config loading and validation for the race simulator."""

from __future__ import annotations

import importlib
import json
from pathlib import Path
from typing import Any, Mapping

import yaml

from spermrace.core.plugin_registry import get_simulation_class, schema_module_name
from spermrace.core.schema_validator import SchemaValidationError, validate_simulation_params


class ConfigValidationError(ValueError):
    """Raised when a run config is malformed."""


TOP_LEVEL_KEYS = ("simulation", "params", "run", "logging")

# Fixed-shape sections: every field is required and exactly typed.
SECTION_FIELDS: dict[str, dict[str, type]] = {
    "run": {"random_seed": int, "max_frames": int},
    "logging": {"level": str, "log_interval": int},
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _read_payload(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigValidationError(f"Config file not found: {path}")

    suffix = path.suffix.lower()
    if suffix not in {".json", ".yaml", ".yml"}:
        raise ConfigValidationError(f"Unsupported config extension '{suffix}' (use .yaml, .yml or .json).")

    text = path.read_text(encoding="utf-8")
    try:
        payload = json.loads(text) if suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigValidationError(f"Could not parse '{path}': {exc}") from exc

    if not isinstance(payload, Mapping):
        raise ConfigValidationError(f"Config '{path}' must hold a mapping at the top level.")
    return dict(payload)


def _fixed_section(name: str, value: Any) -> dict[str, Any]:
    fields = SECTION_FIELDS[name]
    if not isinstance(value, Mapping):
        raise ConfigValidationError(f"Section '{name}' must be a mapping, got {type(value).__name__}.")

    section = dict(value)
    absent = [key for key in fields if key not in section]
    unknown = [key for key in section if key not in fields]
    if absent or unknown:
        raise ConfigValidationError(
            f"Section '{name}' fields do not match: missing {absent}, unknown {unknown}."
        )
    for key, expected_type in fields.items():
        if type(section[key]) is not expected_type:
            raise ConfigValidationError(
                f"Field '{name}.{key}' expected {expected_type.__name__}, got {type(section[key]).__name__}."
            )
    return section


def validate_config(config: Mapping[str, Any], strict: bool = True) -> dict[str, Any]:
    """Validate a parsed config mapping.

    The result holds ``simulation``, ``simulation_config`` (params with
    defaults applied), ``run_config``, ``logging_config`` and ``seed``.
    """
    absent = [key for key in TOP_LEVEL_KEYS if key not in config]
    if absent:
        raise ConfigValidationError(f"Missing required top-level section(s): {absent}.")
    unknown = [key for key in config if key not in TOP_LEVEL_KEYS]
    if unknown:
        raise ConfigValidationError(f"Unknown top-level key(s): {unknown}.")

    simulation_name = config["simulation"]
    if not isinstance(simulation_name, str) or not simulation_name:
        raise ConfigValidationError("'simulation' must name a race variant.")
    get_simulation_class(simulation_name)

    run_config = _fixed_section("run", config["run"])
    if run_config["max_frames"] < 0:
        raise ConfigValidationError("Field 'run.max_frames' must be >= 0.")
    logging_config = _fixed_section("logging", config["logging"])
    if logging_config["level"].upper() not in LOG_LEVELS:
        raise ConfigValidationError(f"Field 'logging.level' must be one of {list(LOG_LEVELS)}.")

    params = config["params"] or {}
    if not isinstance(params, Mapping):
        raise ConfigValidationError("Section 'params' must be a mapping.")
    schema_module = importlib.import_module(schema_module_name(simulation_name))
    try:
        simulation_config = validate_simulation_params(dict(params), schema_module, simulation_name, strict=strict)
    except SchemaValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc

    return {
        "simulation": simulation_name,
        "simulation_config": simulation_config,
        "run_config": run_config,
        "logging_config": logging_config,
        "seed": run_config["random_seed"],
    }


def load_config(path: str | Path, strict: bool = True) -> dict[str, Any]:
    """Load and validate a YAML or JSON run config."""
    return validate_config(_read_payload(Path(path)), strict=strict)
