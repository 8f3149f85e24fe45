"""Logging utilities for DepVerify."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

ROOT_LOGGER_NAME = "dep_verify"


class DepVerifyLogger:
    """Thin wrapper around a ``dep_verify.<name>`` stdlib logger.

    Keyword arguments are passed to the record as ``extra`` fields.
    """

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    def _log(self, level: int, msg: str, fields: Dict[str, Any]) -> None:
        self.logger.log(level, msg, extra=fields or None)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, kwargs)


def _create_rich_handler() -> RichHandler:
    """Create the rich console handler with the project theme.

    Output goes to stderr so that JSON reports on stdout stay parseable.
    """
    console = Console(stderr=True, theme=Theme({
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
        "critical": "red bold",
        "debug": "dim",
    }))

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))
    return handler


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    debug: bool = False
) -> None:
    """Setup logging configuration for DepVerify.

    Args:
        verbose: Show scan progress (INFO) instead of warnings only
        log_file: Optional log file path
        debug: Also show DEBUG records (file discovery, parse failures)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.addHandler(_create_rich_handler())
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    # Set specific logger levels
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> DepVerifyLogger:
    """Get a DepVerify logger instance.

    Args:
        name: Logger name

    Returns:
        Logger wrapper writing below the ``dep_verify`` logger
    """
    return DepVerifyLogger(name)
