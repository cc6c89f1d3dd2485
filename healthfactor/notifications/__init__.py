"""Event sink implementations."""
from .log_sink import LoggingEventSink

__all__ = ["LoggingEventSink"]
