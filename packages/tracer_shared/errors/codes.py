"""Shared error code constants.

Codes are stable machine-readable strings. Trace-specific codes live next to
the generic ones because the tracer is the only consumer.
"""

# Validation
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
INVALID_OPERATION = "INVALID_OPERATION"

# Dependency / external system
DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"
DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
TRACE_SINK_OPEN_FAILED = "TRACE_SINK_OPEN_FAILED"
TRACE_SINK_WRITE_FAILED = "TRACE_SINK_WRITE_FAILED"
TRACE_SINK_CLOSE_FAILED = "TRACE_SINK_CLOSE_FAILED"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
