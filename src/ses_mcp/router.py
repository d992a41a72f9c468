# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Method routing for validated JSON-RPC envelopes."""

from __future__ import annotations

from typing import Any, Dict

from .config import ServerConfig
from .dispatcher import handle_tool_call
from .jsonrpc import METHOD_NOT_FOUND, RpcRequest, make_error, make_result
from .logger import get_logger
from .tools import list_tools

SERVER_NAME = "AWS SES SMTP Email MCP Server"
SERVER_VERSION = "1.0.0"

KNOWN_METHODS = ("initialize", "tools/list", "tools/call")

logger = get_logger("SesMcp.router")


def handle_initialize(request: RpcRequest, config: ServerConfig) -> Dict[str, Any]:
    """Answer capability negotiation.

    Args:
        request: The ``initialize`` envelope.
        config: Supplies the announced protocol version.

    Returns:
        Result envelope with protocol version, capabilities and server info.
    """
    return make_result(
        request.id,
        {
            "protocolVersion": config.protocol_version,
            "capabilities": {"tools": True, "resources": False},
            "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
        },
    )


def handle_tools_list(request: RpcRequest) -> Dict[str, Any]:
    """List the registered tools.

    Args:
        request: The ``tools/list`` envelope.

    Returns:
        Result envelope holding ``{"tools": [...]}`` built from the registry.
    """
    return make_result(request.id, {"tools": list_tools()})


async def handle_rpc_method(request: RpcRequest, config: ServerConfig) -> Dict[str, Any]:
    """Dispatch ``request`` by its ``method`` member.

    Args:
        request: A validated JSON-RPC 2.0 envelope.
        config: Read-only server settings.

    Returns:
        The response envelope; unknown methods yield error -32601.
    """
    method = request.method
    if method == "initialize":
        return handle_initialize(request, config)
    if method == "tools/list":
        return handle_tools_list(request)
    if method == "tools/call":
        return await handle_tool_call(request, config)
    logger.info("Unknown method: %s", method)
    return make_error(request.id, METHOD_NOT_FOUND, f"Method not found: {method}")
