"""
Destinations and the sinks they write to
"""

from .base import Destination
from .sinks import FileSink, MemorySink, Sink, StreamSink

__all__ = [
    "Destination",
    "FileSink",
    "MemorySink",
    "Sink",
    "StreamSink",
]
