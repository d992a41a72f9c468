# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""RFC 5322 message assembly for the ``send_email`` tool.

The formatter only builds the message text. It never opens a connection.
"""

from __future__ import annotations

import re
import secrets
import time
from typing import Annotated, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field

FALLBACK_FROM = "noreply@example.com"
CRLF = "\r\n"

_TAG_RE = re.compile(r"<[^>]*>")
_ENTITIES = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def check_address(value: str) -> str:
    """Validate a bare mailbox address and return it unchanged.

    Display-name forms such as ``Joe <joe@example.com>`` are rejected and
    the input is never normalised, so recipients are echoed as given.
    """
    if "<" in value or ">" in value:
        raise ValueError("value is not a valid email address: display names are not allowed")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(f"value is not a valid email address: {exc}") from None
    return value


EmailAddress = Annotated[str, AfterValidator(check_address)]


class EmailRequest(BaseModel):
    """Validated ``arguments`` of a ``send_email`` call."""

    model_config = ConfigDict(strict=True, frozen=True)

    to: List[EmailAddress] = Field(min_length=1)
    subject: str = Field(min_length=1, max_length=500)
    body: str
    from_: Optional[EmailAddress] = Field(default=None, alias="from")
    reply_to: Optional[EmailAddress] = Field(default=None, alias="replyTo")
    is_html: bool = Field(default=True, alias="isHtml")


def strip_html(html: str) -> str:
    """Best-effort plain text rendering of an HTML body.

    Tags are removed, a fixed set of named entities is decoded and the
    result is trimmed. Malformed markup is passed through as is.
    """
    text = _TAG_RE.sub("", html)
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text.strip()


def resolve_sender(request: EmailRequest, default_from: str | None = None) -> str:
    """Pick the explicit ``from``, then ``default_from``, then the fallback address."""
    return request.from_ or default_from or FALLBACK_FROM


def make_boundary() -> str:
    """Return a MIME boundary built from the clock and a random fragment."""
    return f"----=_Part_{int(time.time() * 1000)}_{secrets.token_hex(6)}"


def build_message(request: EmailRequest, sender: str, boundary: str | None = None) -> str:
    """Assemble the multipart/alternative message for ``request``.

    The plain text part always comes first. When ``is_html`` is set it holds
    the stripped body and an HTML part with the original body follows.
    """
    boundary = boundary or make_boundary()
    lines = [
        f"From: {sender}",
        f"To: {', '.join(request.to)}",
        f"Subject: {request.subject}",
    ]
    if request.reply_to:
        lines.append(f"Reply-To: {request.reply_to}")
    lines += [
        "MIME-Version: 1.0",
        f'Content-Type: multipart/alternative; boundary="{boundary}"',
        "",
    ]

    text = strip_html(request.body) if request.is_html else request.body
    lines += _part(boundary, "text/plain", text)
    if request.is_html:
        lines += _part(boundary, "text/html", request.body)
    lines.append(f"--{boundary}--")
    return CRLF.join(lines) + CRLF


def _part(boundary: str, content_type: str, content: str) -> List[str]:
    return [
        f"--{boundary}",
        f"Content-Type: {content_type}; charset=UTF-8",
        "Content-Transfer-Encoding: 7bit",
        "",
        content,
    ]
