import logging
from typing import List, Optional

from .config import LoggerConfig, get_default_config
from .destinations import Destination
from .dispatcher import LogDispatcher
from .formatter import DEFAULT_FORMAT
from .handler import DestinationHandler

_default_dispatcher: Optional[LogDispatcher] = None


def _destination_options(config: LoggerConfig) -> dict:
    return {
        "format": config.format,
        "min_level": config.min_level,
        "asynchronous": config.asynchronous,
        "collect_metrics": config.collect_metrics,
    }


def create_destinations(config: LoggerConfig) -> List[Destination]:
    """Build the destinations named by ``config.output_type``"""
    destinations = []

    if config.output_type in ("console", "both"):
        options = _destination_options(config)
        if config.colored and config.format == DEFAULT_FORMAT:
            # The coloured console preset brings its own layout
            del options["format"]
        destinations.append(Destination.console(colored=config.colored, **options))

    if config.output_type in ("file", "both"):
        destinations.append(
            Destination.file(config.filename, **_destination_options(config))
        )

    return destinations


def get_dispatcher(config: Optional[LoggerConfig] = None) -> LogDispatcher:
    """Shared dispatcher, created from the default config on first use"""
    global _default_dispatcher
    if _default_dispatcher is None:
        config = config or get_default_config()
        _default_dispatcher = LogDispatcher(create_destinations(config))
    return _default_dispatcher


def reset_dispatcher() -> None:
    """Close the shared dispatcher so the next call rebuilds it"""
    global _default_dispatcher
    if _default_dispatcher is not None:
        _default_dispatcher.close()
        _default_dispatcher = None


def get_logger(name: str, config: Optional[LoggerConfig] = None) -> logging.Logger:
    """Create a stdlib logger that writes through destinations"""
    logger = logging.getLogger(name)

    if not any(isinstance(h, DestinationHandler) for h in logger.handlers):
        config = config or get_default_config()
        logger.setLevel(config.min_level.logging_level)

        dispatcher = LogDispatcher(create_destinations(config))
        logger.addHandler(DestinationHandler(dispatcher))

        logger.propagate = True

    return logger
