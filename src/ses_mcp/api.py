# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""FastAPI application factory for the MCP gateway.

``create_app`` builds the HTTP surface of the server:

- ``OPTIONS`` on any path answers the CORS preflight.
- ``GET /health`` reports status, provider, region and protocol version.
- ``GET /metrics`` exposes Prometheus counters.
- ``POST`` on any path accepts a JSON-RPC 2.0 envelope.
- Any other method is answered with an ``Invalid Request`` envelope.

Every response carries ``Access-Control-Allow-Origin: *``.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, AsyncContextManager, Callable, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from .config import ServerConfig
from .handlers import utc_now_iso
from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    PARSE_ERROR,
    RpcRequest,
    extract_id,
    make_error,
)
from .logger import get_logger
from .prometheus import McpMetrics
from .router import handle_rpc_method
from .tools import TOOL_NAMES

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
ENVELOPE_METHODS = frozenset({"POST", "OPTIONS"})
SERVICE_ROUTES = frozenset({"/health", "/metrics"})

logger = get_logger("SesMcp.api")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _is_service_route(request: Request) -> bool:
    return request.method == "GET" and request.url.path in SERVICE_ROUTES


def _envelope_response(envelope: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(envelope, status_code=status_code)


def error_response(request_id: Any, code: int, message: str) -> JSONResponse:
    """Return an error envelope; parse errors use HTTP 400, everything else 200."""
    status_code = 400 if code == PARSE_ERROR else 200
    return _envelope_response(make_error(request_id, code, message), status_code)


def startup_lifespan(config: ServerConfig) -> Callable[[FastAPI], AsyncContextManager]:
    """Return a lifespan that logs the effective settings on startup."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        missing = config.missing_credentials()
        if missing:
            logger.warning("SES credentials not configured (%s); sends are simulated", ", ".join(missing))
        logger.info(
            "MCP server ready (provider=%s region=%s protocol=%s)",
            config.provider,
            config.aws_region,
            config.protocol_version,
        )
        yield

    return lifespan


def create_app(
    config: ServerConfig,
    metrics: McpMetrics | None = None,
    lifespan: Callable[[FastAPI], AsyncContextManager] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    config:
        Read-only settings shared by every request.
    metrics:
        Optional :class:`McpMetrics`; a private registry is created otherwise.
    lifespan:
        Optional lifespan context manager for startup/shutdown events.
    """
    api = FastAPI(
        title="AWS SES SMTP Email MCP Server",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    api.state.config = config
    api.state.metrics = metrics or McpMetrics()

    @api.middleware("http")
    async def envelope_only(request: Request, call_next):
        """Answer every verb but POST and OPTIONS with an envelope; allow any origin."""
        if request.method in ENVELOPE_METHODS or _is_service_route(request):
            response = await call_next(request)
        else:
            response = error_response(None, INVALID_REQUEST, "Only POST method supported for MCP")
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    @api.options("/{path:path}")
    async def preflight(path: str):
        """Answer CORS preflight requests with an empty body."""
        return Response(status_code=200, headers=CORS_HEADERS)

    @api.get("/health")
    async def health():
        """Liveness check; does not go through the JSON-RPC router."""
        return {
            "status": "healthy",
            "provider": config.provider,
            "region": config.aws_region,
            "protocol": config.protocol_version,
            "timestamp": utc_now_iso(),
        }

    @api.get("/metrics")
    async def prometheus_metrics():
        """Expose Prometheus metrics collected by the gateway."""
        return Response(content=api.state.metrics.generate_latest(), media_type="text/plain; version=0.0.4")

    @api.post("/{path:path}")
    async def rpc(request: Request, path: str):
        """Decode a JSON-RPC envelope and route it."""
        mcp_metrics: McpMetrics = api.state.metrics
        raw = await request.body()
        try:
            payload = json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
        except (UnicodeDecodeError, ValueError) as exc:
            logger.warning("Unparseable request body on /%s: %s", path, exc)
            mcp_metrics.inc_error(PARSE_ERROR)
            return error_response(None, PARSE_ERROR, "Parse error")

        envelope = await handle_payload(payload, config, mcp_metrics)
        return _envelope_response(envelope)

    return api


async def handle_payload(payload: Any, config: ServerConfig, metrics: McpMetrics) -> Dict[str, Any]:
    """Validate a decoded body and return the response envelope."""
    request_id = extract_id(payload)
    if not isinstance(payload, dict):
        envelope = make_error(None, INVALID_REQUEST, "Invalid Request - expected a JSON object")
    elif payload.get("jsonrpc") != JSONRPC_VERSION:
        envelope = make_error(request_id, INVALID_REQUEST, "Must be JSON-RPC 2.0")
    else:
        try:
            request = RpcRequest.model_validate(payload)
        except ValidationError:
            envelope = make_error(None, INVALID_REQUEST, "Invalid Request - id must be a string, number or null")
        else:
            envelope = await _route(request, config, metrics)
    metrics.observe_response(envelope)
    return envelope


async def _route(request: RpcRequest, config: ServerConfig, metrics: McpMetrics) -> Dict[str, Any]:
    if not isinstance(request.method, str):
        return make_error(request.id, INVALID_REQUEST, "Invalid Request - method must be a string")

    metrics.inc_request(request.method)
    try:
        envelope = await handle_rpc_method(request, config)
    except Exception:
        logger.exception("Unhandled error while processing %s", request.method)
        envelope = make_error(request.id, INTERNAL_ERROR, "Internal error")

    if request.method == "tools/call":
        tool = request.params.get("name") if isinstance(request.params, dict) else None
        if tool in TOOL_NAMES:
            metrics.inc_tool_call(tool, "error" not in envelope)
    return envelope
