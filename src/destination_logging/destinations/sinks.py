"""
Sinks: where a destination writes its rendered lines
"""

import sys
from pathlib import Path
from typing import IO, Any, List, Optional, Protocol


class Sink(Protocol):
    """Physical output for rendered log lines"""

    def write(self, line: str) -> None: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


class StreamSink:
    """Write lines to a text stream, stdout by default, flushing each one"""

    def __init__(self, stream: Optional[IO[str]] = None):
        self.stream = stream if stream is not None else sys.stdout

    def write(self, line: str) -> None:
        self.stream.write(line + "\n")
        self.flush()

    def flush(self) -> None:
        if hasattr(self.stream, "flush"):
            self.stream.flush()

    def close(self) -> None:
        # Never close a stream we did not open
        self.flush()


class FileSink:
    """
    Append lines to a file, creating its directory on first write

    Every line is flushed as it is written, so the file can be tailed or
    read while the destination is still open.
    """

    def __init__(self, filename: str, mode: str = "a", encoding: str = "utf-8"):
        self.filename = filename
        self.mode = mode
        self.encoding = encoding
        self.stream: Optional[Any] = None

    def _open_stream(self) -> None:
        Path(self.filename).parent.mkdir(parents=True, exist_ok=True)
        self.stream = open(self.filename, self.mode, encoding=self.encoding)

    def write(self, line: str) -> None:
        if self.stream is None:
            self._open_stream()
        self.stream.write(line + "\n")
        self.stream.flush()

    def flush(self) -> None:
        if self.stream:
            self.stream.flush()

    def close(self) -> None:
        if self.stream:
            self.stream.flush()
            self.stream.close()
            self.stream = None


class MemorySink:
    """Keep rendered lines in a list"""

    def __init__(self):
        self.lines: List[str] = []
        self.flush_count = 0
        self.closed = False

    def write(self, line: str) -> None:
        self.lines.append(line)

    def flush(self) -> None:
        self.flush_count += 1

    def close(self) -> None:
        self.closed = True

    def clear(self) -> None:
        self.lines.clear()
