#!/usr/bin/env python3
"""
Destination logging examples

Shows console and file destinations with their own filters and formats,
driven both directly and through the standard logging module.
"""

import logging
import tempfile
from pathlib import Path

from destination_logging import (
    Destination,
    DestinationHandler,
    Filters,
    LogDispatcher,
    LogLevel,
)


def direct_dispatch_example(log_dir: Path):
    print("=== Direct dispatch ===")

    console = Destination.console(colored=True, asynchronous=False)
    console.min_level = LogLevel.DEBUG

    errors_only = Destination.file(
        str(log_dir / "errors.log"),
        format="$Dyyyy-MM-dd'T'HH:mm:ss.SSSZ$d {\"level\":\"$L\",\"msg\":\"$m\"}",
        min_level=LogLevel.ERROR,
    )

    api_only = Destination.console(format="[api] $N:$l $M", asynchronous=False)
    api_only.add_filter(Filters.Function.starts_with("handle_", required=True))

    dispatcher = LogDispatcher([console, errors_only, api_only])

    dispatcher.verbose("not shown: below the console minimum")
    dispatcher.debug(lambda: f"built lazily: {sum(range(10))}")
    dispatcher.warning("cache miss for key 'user:42'")

    def handle_request():
        dispatcher.info("GET /items 200")
        dispatcher.error('upstream said "no"')

    handle_request()

    dispatcher.close()
    print((log_dir / "errors.log").read_text(encoding="utf-8"))


def stdlib_logging_example():
    print("=== Through the logging module ===")

    destination = Destination.console(format="$L $T $F: $M", asynchronous=False)
    destination.add_filter(Filters.Message.excludes("password", required=True))

    handler = DestinationHandler(destinations=[destination])
    logger = logging.getLogger("example")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)

    logger.info("user %s signed in", "alice")
    logger.warning("password reset requested")  # filtered out
    logger.error("payment failed")

    logger.removeHandler(handler)
    handler.close()


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmp:
        direct_dispatch_example(Path(tmp))
    stdlib_logging_example()
