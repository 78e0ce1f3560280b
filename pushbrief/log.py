"""Logging setup for the pushbrief CLI."""

import os
import sys

from loguru import logger

from pushbrief.config import LOG_LEVEL_ENV_VAR


def configure_logging(verbose: bool = False) -> None:
    """Route loguru output to stderr.

    Diagnostics stay quiet unless --verbose is passed or PUSHBRIEF_LOG_LEVEL
    is set, so they never mix with JSON written to stdout.

    Args:
        verbose: Log at DEBUG level.
    """
    level = "DEBUG" if verbose else os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()

    # Clear existing sinks to avoid duplicates
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{line}</cyan> | <level>{message}</level>",
        catch=True,
    )
