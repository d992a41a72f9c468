# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tool handlers.

Each handler receives the raw ``arguments`` of a ``tools/call`` request and
the server configuration, and returns a JSON-compatible payload. Validation
failures raise :class:`~ses_mcp.errors.InvalidToolArguments`.
"""

from __future__ import annotations

import secrets
import time
from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import ValidationError

from .config import ServerConfig
from .email_format import EmailRequest, build_message, make_boundary, resolve_sender
from .errors import InvalidToolArguments
from .logger import get_logger
from .tools import GET_EMAIL_QUOTA, SEND_EMAIL

PROVIDER = "aws-ses-smtp"
SIMULATED_NOTE = "SMTP sending simulated - in production, use proper SMTP client library"
QUOTA_NOTE = "Quota information requires SES API access, not available via SMTP"
QUOTA_RECOMMENDATION = "Check AWS SES console for sending quota and usage statistics"

logger = get_logger("SesMcp.handlers")


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a ``Z`` suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _new_message_id() -> str:
    return f"ses-smtp-{int(time.time() * 1000)}-{secrets.token_hex(6)}"


def parse_email_request(arguments: Any) -> EmailRequest:
    """Validate raw ``send_email`` arguments."""
    try:
        return EmailRequest.model_validate(arguments)
    except ValidationError as exc:
        raise InvalidToolArguments.from_validation_error(SEND_EMAIL, exc) from exc


async def send_email(arguments: Any, config: ServerConfig) -> Dict[str, Any]:
    """Build the message for a ``send_email`` call and simulate its delivery.

    No connection to the SES SMTP endpoint is opened; the assembled message
    is only measured and logged.
    """
    request = parse_email_request(arguments)
    sender = resolve_sender(request, config.default_from)
    message = build_message(request, sender, make_boundary())
    message_id = _new_message_id()

    logger.info(
        "Simulated send %s from %s to %d recipient(s) (%d bytes)",
        message_id,
        sender,
        len(request.to),
        len(message.encode("utf-8")),
    )
    return {
        "success": True,
        "messageId": message_id,
        "to": list(request.to),
        "subject": request.subject,
        "provider": PROVIDER,
        "region": config.aws_region,
        "smtpHost": config.smtp_host,
        "timestamp": utc_now_iso(),
        "note": SIMULATED_NOTE,
    }


async def get_email_quota(arguments: Any, config: ServerConfig) -> Dict[str, Any]:
    """Report that quota data is unavailable over SMTP."""
    return {
        "provider": PROVIDER,
        "region": config.aws_region,
        "note": QUOTA_NOTE,
        "recommendation": QUOTA_RECOMMENDATION,
        "timestamp": utc_now_iso(),
    }


HANDLERS = {
    SEND_EMAIL: send_email,
    GET_EMAIL_QUOTA: get_email_quota,
}
