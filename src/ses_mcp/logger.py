# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Logging utilities for the SES MCP server.

Library modules only ask for named loggers. Level, handlers and format are
configured once by the entry point (``ses-mcp serve`` or
:mod:`ses_mcp.server`) through :func:`configure_logging`.

Example:
    Typical usage in a module::

        from ses_mcp.logger import get_logger

        logger = get_logger("SesMcp.dispatcher")
        logger.info("Tool call completed")
"""

import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "SesMcp") -> logging.Logger:
    """Retrieve a logger instance bound to ``name``.

    No handler is attached here; that responsibility lies with the
    application entry point.
    """
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger for a server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        force=True,  # Force reconfiguration to avoid duplicate handlers
    )
