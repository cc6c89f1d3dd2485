"""Protocol interfaces for the recording boundary."""
from .event_sink import EventSink
from .state_store import HfStateStore

__all__ = ["EventSink", "HfStateStore"]
