# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by tool handlers and the configuration loader."""

from __future__ import annotations

from pydantic import ValidationError


class McpError(Exception):
    """Base class for errors raised inside the MCP server."""


class InvalidToolArguments(McpError, ValueError):
    """Raised when the ``arguments`` of a tool call fail validation.

    ``code`` is a stable identifier included in the rejection log line.
    """

    code = "invalid_arguments"

    def __init__(self, tool: str, message: str):
        super().__init__(message)
        self.tool = tool

    @classmethod
    def from_validation_error(cls, tool: str, exc: ValidationError) -> InvalidToolArguments:
        """Summarise a pydantic error as ``field: reason`` pairs."""
        issues = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
            issues.append(f"{location}: {err.get('msg', 'invalid value')}")
        return cls(tool, f"Invalid arguments for {tool}: " + "; ".join(issues))


class ConfigurationError(McpError):
    """Raised when a configuration value cannot be interpreted."""
