"""Public API for shared tracer configuration utilities."""

from .loader import load_settings, params_from_properties
from .models import (
    DEFAULT_CONFIG_PATH,
    LoggingSettings,
    TraceSettings,
    TracerSettings,
    WorkloadSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "LoggingSettings",
    "TraceSettings",
    "TracerSettings",
    "WorkloadSettings",
    "load_settings",
    "params_from_properties",
]
