# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Prometheus metrics exposed by the MCP gateway."""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import CollectorRegistry, Counter, generate_latest

from .router import KNOWN_METHODS


class McpMetrics:
    """Wrapper around the Prometheus registry used by one application."""

    def __init__(self, registry: CollectorRegistry | None = None):
        """Create the counters inside the provided registry."""
        self.registry = registry or CollectorRegistry()
        self.requests = Counter(
            "ses_mcp_requests_total", "Total JSON-RPC requests", ["method"], registry=self.registry
        )
        self.errors = Counter(
            "ses_mcp_errors_total", "Total JSON-RPC error responses", ["code"], registry=self.registry
        )
        self.tool_calls = Counter(
            "ses_mcp_tool_calls_total", "Total tool invocations", ["tool", "outcome"], registry=self.registry
        )

    def inc_request(self, method: Any):
        """Count a request. Methods outside the known set share the ``other`` label."""
        label = method if method in KNOWN_METHODS else "other"
        self.requests.labels(method=label).inc()

    def inc_error(self, code: int):
        """Increase the ``errors`` counter for a JSON-RPC error code."""
        self.errors.labels(code=str(code)).inc()

    def inc_tool_call(self, tool: str, ok: bool):
        """Count one invocation of ``tool`` by outcome."""
        self.tool_calls.labels(tool=tool, outcome="ok" if ok else "error").inc()

    def observe_response(self, response: Dict[str, Any]):
        """Count the error code carried by ``response``, if any."""
        error = response.get("error")
        if error:
            self.inc_error(error["code"])

    def generate_latest(self) -> bytes:
        """Return the latest metrics snapshot in Prometheus text format."""
        return generate_latest(self.registry)
