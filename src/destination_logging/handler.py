"""
Bridge from the standard logging module to destinations
"""

import logging
from typing import List, Optional

from .destinations import Destination
from .dispatcher import LogDispatcher
from .event import LogEvent

# The library's own diagnostics must not loop back into its destinations
_OWN_LOGGER_PREFIX = __name__.split(".")[0]


class DestinationHandler(logging.Handler):
    """logging.Handler that routes records through a LogDispatcher"""

    def __init__(
        self,
        dispatcher: Optional[LogDispatcher] = None,
        destinations: Optional[List[Destination]] = None,
    ):
        super().__init__()
        self.dispatcher = dispatcher or LogDispatcher(destinations)

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.split(".")[0] == _OWN_LOGGER_PREFIX:
            return
        try:
            self.dispatcher.dispatch_event(LogEvent.from_record(record))
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        self.dispatcher.flush()

    def close(self) -> None:
        try:
            self.dispatcher.close()
        finally:
            super().close()
