# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""``tools/call`` dispatch.

Maps the requested tool name to its handler and wraps the outcome into a
response envelope. Handler failures never propagate to the caller.
"""

from __future__ import annotations

import json
from typing import Any, Dict

from .config import ServerConfig
from .errors import InvalidToolArguments
from .handlers import HANDLERS
from .jsonrpc import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, RpcRequest, make_error, make_result
from .logger import get_logger

FALLBACK_ERROR_MESSAGE = "Tool execution failed"

logger = get_logger("SesMcp.dispatcher")


def text_content(result: Any) -> Dict[str, Any]:
    """Wrap a handler result into a single ``text`` content block."""
    text = result if isinstance(result, str) else json.dumps(result, indent=2, ensure_ascii=False)
    return {"content": [{"type": "text", "text": text}]}


async def handle_tool_call(request: RpcRequest, config: ServerConfig) -> Dict[str, Any]:
    """Run the tool named in ``request.params`` and wrap its outcome.

    Args:
        request: Envelope whose ``params`` hold ``name`` and ``arguments``.
        config: Read-only server settings passed to the handler.

    Returns:
        A response envelope: a ``text`` content block on success, otherwise
        an error with code -32602 (missing name), -32601 (unknown tool) or
        -32603 (handler failure).
    """
    params = request.params if isinstance(request.params, dict) else {}
    name = params.get("name")
    if not name:
        return make_error(request.id, INVALID_PARAMS, "Invalid params - tool name required")

    handler = HANDLERS.get(name) if isinstance(name, str) else None
    if handler is None:
        logger.info("Unknown tool requested: %s", name)
        return make_error(request.id, METHOD_NOT_FOUND, f"Tool not found: {name}")

    try:
        result = await handler(params.get("arguments"), config)
    except InvalidToolArguments as exc:
        logger.warning("Rejected %s call (%s): %s", name, exc.code, exc)
        return make_error(request.id, INTERNAL_ERROR, str(exc) or FALLBACK_ERROR_MESSAGE)
    except Exception as exc:
        logger.exception("Tool %s failed", name)
        return make_error(request.id, INTERNAL_ERROR, str(exc) or FALLBACK_ERROR_MESSAGE)

    return make_result(request.id, text_content(result))
