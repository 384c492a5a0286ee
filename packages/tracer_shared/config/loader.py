"""Configuration loading with deterministic precedence.

The cascade is always:
1) CLI params (or harness properties)
2) Environment variables
3) ~/.config/ycsb-tracer/tracer.yaml
4) Built-in model defaults

Environment variable format:
- Prefix: ``TRACER_``
- Nested keys: ``__`` separator
- Example: ``TRACER_WORKLOAD__USER_COUNT=10`` -> ``workload.user_count = 10``
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, TracerSettings

# Harness property name -> (section, field).
PROPERTY_PATHS: dict[str, tuple[str, str]] = {
    "tracer.file": ("trace", "file"),
    "mockvalues": ("trace", "mock_values"),
    "recordcount": ("workload", "record_count"),
    "usercount": ("workload", "user_count"),
    "purposecount": ("workload", "purpose_count"),
    "objectionstart": ("workload", "objection_start"),
    "objectioncount": ("workload", "objection_count"),
}


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> TracerSettings:
    """Resolve one immutable settings object for a trace session."""
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    init_values = _as_plain_dict(cli_params) if cli_params is not None else {}

    if resolved == DEFAULT_CONFIG_PATH:
        return TracerSettings(**init_values)

    class _FileTracerSettings(TracerSettings):
        _config_path: ClassVar[Path] = resolved

    return _FileTracerSettings(**init_values)


def params_from_properties(properties: Mapping[str, str]) -> dict[str, Any]:
    """Map harness-style flat properties onto nested settings params.

    Unknown properties are ignored since the harness passes its whole property
    set to every binding. ``mockvalues`` follows Java boolean parsing: only
    ``true`` (any case) enables it.
    """
    params: dict[str, Any] = {}
    for name, raw_value in properties.items():
        path = PROPERTY_PATHS.get(name)
        if path is None:
            continue
        section, field = path
        value: Any = raw_value
        if field == "mock_values":
            value = str(raw_value).strip().lower() == "true"
        elif isinstance(raw_value, str):
            value = raw_value.strip()
        params.setdefault(section, {})[field] = value
    return params


def _as_plain_dict(value: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-copy a mapping into plain ``dict`` values recursively."""
    output: dict[str, Any] = {}
    for key, subvalue in value.items():
        if isinstance(subvalue, Mapping):
            output[str(key)] = _as_plain_dict(subvalue)
        else:
            output[str(key)] = copy.deepcopy(subvalue)
    return output
