# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Static registry of the tools exposed by the server.

Descriptors are frozen models; :func:`list_tools` serializes them into fresh
dictionaries on every call so callers can never alter the registry.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """Name, description and JSON schema of one callable tool."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(alias="inputSchema")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the wire name ``inputSchema``."""
        return self.model_dump(mode="json", by_alias=True)


SEND_EMAIL = "send_email"
GET_EMAIL_QUOTA = "get_email_quota"

TOOLS: Tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=SEND_EMAIL,
        description="Send an email to one or more recipients via AWS SES SMTP",
        input_schema={
            "type": "object",
            "properties": {
                "to": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Recipient email addresses",
                },
                "subject": {
                    "type": "string",
                    "description": "Email subject line",
                },
                "body": {
                    "type": "string",
                    "description": "Email body content (HTML or plain text)",
                },
                "from": {
                    "type": "string",
                    "description": "Sender email address (optional, must be verified in SES)",
                },
                "replyTo": {
                    "type": "string",
                    "description": "Reply-to email address (optional)",
                },
                "isHtml": {
                    "type": "boolean",
                    "description": "Whether body contains HTML",
                    "default": True,
                },
            },
            "required": ["to", "subject", "body"],
        },
    ),
    ToolDescriptor(
        name=GET_EMAIL_QUOTA,
        description="Check SES sending quota and current usage",
        input_schema={"type": "object", "properties": {}},
    ),
)

TOOL_NAMES = frozenset(tool.name for tool in TOOLS)


def list_tools() -> List[Dict[str, Any]]:
    """Return the registry as JSON-compatible dictionaries."""
    return [tool.to_dict() for tool in TOOLS]

