"""Canonical logging field names shared by tracer components."""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"

# Trace session fields.
SESSION_ID = "session_id"
TRACE_FILE = "trace_file"

# Common service-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
