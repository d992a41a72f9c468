# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""ASGI application entry point for uvicorn.

Usage:
    uvicorn ses_mcp.server:app --host 0.0.0.0 --port 8000

Configuration is read once at import time; see :mod:`ses_mcp.config` for
the recognised INI keys and environment variables.
"""

from __future__ import annotations

from .api import create_app, startup_lifespan
from .config import load_config
from .logger import configure_logging

_config = load_config()
configure_logging(_config.log_level)

app = create_app(_config, lifespan=startup_lifespan(_config))
