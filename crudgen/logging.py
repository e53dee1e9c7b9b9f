"""Logging utilities for crudgen commands.

Everything logs under the ``crudgen`` hierarchy: per-artifact status lines
("Repository class generated: ...", "... already exists, skipping: ...") at
INFO, per-file extraction counts at DEBUG, skipped unparsable files at
WARNING and failed render/write tasks at ERROR.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "crudgen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the crudgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the crudgen logger with console output and optional file sink.

    ``verbose`` lowers the level to DEBUG so extraction details show up.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[crudgen] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
