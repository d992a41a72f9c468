# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""MCP server exposing AWS SES email tools over JSON-RPC 2.0.

Components:
    create_app: FastAPI gateway (preflight, health, JSON-RPC endpoint).
    handle_rpc_method: Method router for ``initialize``, ``tools/list``
        and ``tools/call``.
    ServerConfig: Read-only settings loaded from INI file and environment.

Sending is simulated: ``send_email`` validates its arguments and assembles
the RFC 5322 message, but no SMTP connection is opened.

Example:
    Serve the application::

        from ses_mcp import create_app, load_config

        app = create_app(load_config())

        # Or via CLI
        # ses-mcp serve --port 8000
"""

from .api import create_app
from .config import ServerConfig, load_config
from .router import handle_rpc_method

__all__ = ["ServerConfig", "create_app", "handle_rpc_method", "load_config"]
