"""Schema validation utilities for race variant parameters."""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Mapping


class SchemaValidationError(ValueError):
    """Raised when variant params fail schema validation."""


@dataclass(frozen=True)
class ParamSchema:
    """The three tables a variant's ``config_schema`` module declares."""

    required: Mapping[str, type]
    defaults: Mapping[str, Any]
    optional: Mapping[str, type]

    @classmethod
    def from_module(cls, schema_module: Any, simulation_name: str) -> ParamSchema:
        tables = [getattr(schema_module, name, {}) for name in ("REQUIRED_PARAMS", "DEFAULTS", "OPTIONAL_PARAMS")]
        if not all(isinstance(table, Mapping) for table in tables):
            raise SchemaValidationError(
                f"Schema for '{simulation_name}' needs REQUIRED_PARAMS, DEFAULTS and OPTIONAL_PARAMS as mappings."
            )
        return cls(*tables)

    @property
    def known_keys(self) -> set[str]:
        return set(self.required) | set(self.optional) | set(self.defaults)


def _matches(value: Any, expected_type: type) -> bool:
    # YAML writes ``3`` for a float knob; accept ints there but never bools.
    if expected_type is float and type(value) is int:
        return True
    return type(value) is expected_type


def _check_type(key: str, value: Any, expected_type: type) -> None:
    if not _matches(value, expected_type):
        raise SchemaValidationError(
            f"Parameter '{key}' expected {expected_type.__name__}, got {type(value).__name__}."
        )


def validate_simulation_params(
    params: dict[str, Any],
    schema_module: Any,
    simulation_name: str,
    strict: bool = True,
) -> dict[str, Any]:
    """Merge ``params`` over the variant's defaults and type-check the result.

    Unknown keys raise in strict mode and emit a ``UserWarning`` otherwise;
    they are kept in the returned mapping either way.
    """
    schema = ParamSchema.from_module(schema_module, simulation_name)
    merged = {**schema.defaults, **params}

    absent = [key for key in schema.required if key not in merged]
    if absent:
        raise SchemaValidationError(f"Simulation '{simulation_name}' missing required parameter(s) {absent}.")

    for table in (schema.required, schema.optional):
        for key, expected_type in table.items():
            if key in merged:
                _check_type(key, merged[key], expected_type)

    unknown = sorted(key for key in merged if key not in schema.known_keys)
    if unknown:
        message = f"Unknown parameter(s) {unknown} for simulation '{simulation_name}'."
        if strict:
            raise SchemaValidationError(message)
        warnings.warn(message, stacklevel=2)
    return merged
