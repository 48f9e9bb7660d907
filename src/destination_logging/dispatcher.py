"""
Dispatcher: fans log calls out to destinations

Asynchronous destinations get one worker thread each, fed by a FIFO queue,
so their output keeps submission order without blocking the caller.
"""

import logging
import sys
import threading
import time
from queue import Queue
from typing import Any, Callable, Dict, List, Optional, Union

from .destinations import Destination
from .event import LogEvent
from .levels import LogLevel

logger = logging.getLogger(__name__)

Message = Union[Any, Callable[[], Any]]

_STOP = object()


def _resolve(message: Message) -> str:
    """
    Evaluate a lazy message and turn it into text

    Any callable other than a class is called with no arguments. A failing
    callable or ``__str__`` is logged and replaced with a placeholder line,
    so the log call itself never raises.
    """
    try:
        if callable(message) and not isinstance(message, type):
            message = message()
        return message if isinstance(message, str) else str(message)
    except Exception as e:
        logger.exception("could not build log message")
        return f"<unprintable message: {type(e).__name__}>"


def _deliver(destination: Destination, event: LogEvent) -> None:
    try:
        destination.send(event)
    except Exception:
        logger.exception("destination %s failed to write a log line", destination.name)


class _DestinationWorker:
    """Single consumer thread delivering events to one destination in order"""

    def __init__(self, destination: Destination):
        self.destination = destination
        self.queue: Queue = Queue()
        self.thread = threading.Thread(
            target=self._run,
            daemon=True,
            name=f"destination-worker-{destination.name}",
        )
        self.thread.start()

    def submit(self, event: LogEvent) -> None:
        self.queue.put(event)

    def drain(self, timeout: Optional[float]) -> bool:
        """Wait until everything queued so far has been delivered"""
        marker = threading.Event()
        self.queue.put(marker)
        return marker.wait(timeout)

    def stop(self, timeout: Optional[float]) -> None:
        self.queue.put(_STOP)
        self.thread.join(timeout)

    def _run(self) -> None:
        while True:
            item = self.queue.get()
            try:
                if item is _STOP:
                    return
                if isinstance(item, threading.Event):
                    item.set()
                    continue
                _deliver(self.destination, item)
            finally:
                self.queue.task_done()


class LogDispatcher:
    """Send log calls to every registered destination"""

    def __init__(self, destinations: Optional[List[Destination]] = None):
        self._destinations: List[Destination] = []
        self._workers: Dict[int, _DestinationWorker] = {}
        self._lock = threading.Lock()
        for destination in destinations or []:
            self.add_destination(destination)

    # Destination management

    def add_destination(self, destination: Destination) -> bool:
        """Register a destination; False if it is already registered"""
        with self._lock:
            if any(d is destination for d in self._destinations):
                return False
            self._destinations.append(destination)
            return True

    def remove_destination(self, destination: Destination) -> bool:
        with self._lock:
            for i, existing in enumerate(self._destinations):
                if existing is destination:
                    del self._destinations[i]
                    worker = self._workers.pop(id(destination), None)
                    break
            else:
                return False
        if worker is not None:
            worker.stop(timeout=5.0)
        return True

    def remove_all_destinations(self) -> None:
        for destination in self.destinations:
            self.remove_destination(destination)

    @property
    def destinations(self) -> List[Destination]:
        with self._lock:
            return list(self._destinations)

    def count_destinations(self) -> int:
        return len(self.destinations)

    def _worker_for(self, destination: Destination) -> Optional[_DestinationWorker]:
        """Worker for a registered destination; None once it is gone"""
        with self._lock:
            worker = self._workers.get(id(destination))
            if worker is None:
                if not any(d is destination for d in self._destinations):
                    return None
                worker = _DestinationWorker(destination)
                self._workers[id(destination)] = worker
            return worker

    # Logging API

    # ``message`` may be a zero-argument callable (not a class); it is only
    # called when some destination needs the text.

    def verbose(self, message: Message, stacklevel: int = 1) -> None:
        self.log(LogLevel.VERBOSE, message, stacklevel=stacklevel + 1)

    def debug(self, message: Message, stacklevel: int = 1) -> None:
        self.log(LogLevel.DEBUG, message, stacklevel=stacklevel + 1)

    def info(self, message: Message, stacklevel: int = 1) -> None:
        self.log(LogLevel.INFO, message, stacklevel=stacklevel + 1)

    def warning(self, message: Message, stacklevel: int = 1) -> None:
        self.log(LogLevel.WARNING, message, stacklevel=stacklevel + 1)

    def error(self, message: Message, stacklevel: int = 1) -> None:
        self.log(LogLevel.ERROR, message, stacklevel=stacklevel + 1)

    def log(self, level: LogLevel, message: Message, stacklevel: int = 1) -> None:
        """
        Log ``message`` with the caller's file, function and line

        A callable ``message`` is treated as lazy and invoked without
        arguments at most once, so log a function object's text with
        ``str(func)``. Classes are never called.
        """
        frame = sys._getframe(stacklevel)
        code = frame.f_code
        self.dispatch(
            LogLevel(level),
            message,
            thread=threading.current_thread().name,
            file=code.co_filename,
            function=code.co_name,
            line=frame.f_lineno,
        )

    def dispatch(
        self,
        level: LogLevel,
        message: Message,
        thread: str = "",
        file: str = "",
        function: str = "",
        line: int = 0,
    ) -> None:
        """
        Deliver one log call to each destination that accepts it

        The message is resolved at most once, and only for destinations
        that accept the event. Destinations with message filters need the
        text to decide, so it is resolved before filtering for them.
        """
        resolved: Optional[str] = None

        for destination in self.destinations:
            if destination.has_message_filters():
                if resolved is None:
                    resolved = _resolve(message)
                candidate = LogEvent(level, resolved, thread, file, function, line)
            else:
                candidate = LogEvent(level, "", thread, file, function, line)

            if not destination.should_log(candidate):
                continue

            if resolved is None:
                resolved = _resolve(message)
            event = LogEvent(level, resolved, thread, file, function, line)

            if destination.asynchronous:
                worker = self._worker_for(destination)
                # removed or closed while this call was in flight
                if worker is not None:
                    worker.submit(event)
            else:
                _deliver(destination, event)

    def dispatch_event(self, event: LogEvent) -> None:
        self.dispatch(
            event.level,
            event.message,
            thread=event.thread,
            file=event.file,
            function=event.function,
            line=event.line,
        )

    def flush(self, timeout: float = 5.0) -> bool:
        """
        Wait for queued events to be written, then flush every destination

        ``timeout`` bounds the whole wait, shared by all workers. Returns
        False if some worker did not drain in time.
        """
        with self._lock:
            workers = list(self._workers.values())

        deadline = time.monotonic() + timeout
        drained = True
        for worker in workers:
            remaining = max(0.0, deadline - time.monotonic())
            if not worker.drain(remaining):
                drained = False

        for destination in self.destinations:
            try:
                destination.flush()
            except Exception:
                logger.exception("destination %s failed to flush", destination.name)
        return drained

    def close(self, timeout: float = 5.0) -> None:
        """Flush, stop workers and close every destination"""
        deadline = time.monotonic() + timeout
        self.flush(timeout)
        with self._lock:
            workers = list(self._workers.values())
            self._workers.clear()
            destinations = list(self._destinations)
            self._destinations.clear()

        for worker in workers:
            worker.stop(max(0.0, deadline - time.monotonic()))
        for destination in destinations:
            try:
                destination.close()
            except Exception:
                logger.exception("destination %s failed to close", destination.name)
