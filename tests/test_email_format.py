# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for message assembly and HTML stripping."""

import email
from email import policy

import pytest
from pydantic import ValidationError

from ses_mcp.email_format import (
    FALLBACK_FROM,
    EmailRequest,
    build_message,
    make_boundary,
    resolve_sender,
    strip_html,
)


def _request(**overrides):
    data = {"to": ["a@example.com"], "subject": "Hi", "body": "<b>Hi</b>"}
    data.update(overrides)
    return EmailRequest.model_validate(data)


class TestStripHtml:
    def test_removes_tags(self):
        assert strip_html("<b>Hi</b>") == "Hi"

    def test_decodes_fixed_entities_and_trims(self):
        html = '  <p>a&nbsp;&amp;&lt;b&gt;&quot;c&quot;&#39;</p>\n'
        assert strip_html(html) == "a &<b>\"c\"'"

    def test_leaves_unknown_entities_and_unclosed_markup(self):
        assert strip_html("&copy; 2025 <b") == "&copy; 2025 <b"


class TestEmailRequest:
    def test_defaults(self):
        request = _request()
        assert request.is_html is True
        assert request.from_ is None
        assert request.reply_to is None

    def test_aliases(self):
        request = _request(**{"from": "me@example.com", "replyTo": "reply@example.com", "isHtml": False})
        assert request.from_ == "me@example.com"
        assert request.reply_to == "reply@example.com"
        assert request.is_html is False

    @pytest.mark.parametrize(
        "overrides",
        [
            {"subject": ""},
            {"subject": "x" * 501},
            {"to": []},
            {"to": ["not-an-address"]},
            {"to": "a@example.com"},
            {"from": "nobody"},
            {"replyTo": "@example.com"},
            {"isHtml": "yes"},
            {"body": None},
        ],
    )
    def test_rejects_invalid_fields(self, overrides):
        with pytest.raises(ValidationError):
            _request(**overrides)

    @pytest.mark.parametrize("address", ["Joe <joe@example.com>", "<joe@example.com>", "joe@example.com>"])
    def test_rejects_display_name_forms(self, address):
        with pytest.raises(ValidationError):
            _request(to=[address])

    def test_addresses_are_kept_as_given(self):
        request = _request(to=["Alice@EXAMPLE.COM"], **{"from": "Me@Example.com", "replyTo": "Reply@EXAMPLE.org"})

        assert request.to == ["Alice@EXAMPLE.COM"]
        assert request.from_ == "Me@Example.com"
        assert request.reply_to == "Reply@EXAMPLE.org"

    def test_python_field_names_are_not_accepted(self):
        request = _request(is_html=False, from_="x@example.com", reply_to="y@example.com")

        assert request.is_html is True
        assert request.from_ is None
        assert request.reply_to is None

    def test_subject_length_bounds(self):
        assert _request(subject="x").subject == "x"
        assert len(_request(subject="x" * 500).subject) == 500


def test_resolve_sender_precedence():
    assert resolve_sender(_request(**{"from": "me@example.com"}), "default@example.com") == "me@example.com"
    assert resolve_sender(_request(), "default@example.com") == "default@example.com"
    assert resolve_sender(_request(), None) == FALLBACK_FROM


def test_make_boundary_shape():
    first, second = make_boundary(), make_boundary()
    assert first.startswith("----=_Part_")
    assert first != second


class TestBuildMessage:
    def test_html_message_has_text_and_html_parts(self):
        message = build_message(_request(), "sender@example.com", "BOUNDARY")

        assert message.startswith(
            "From: sender@example.com\r\n"
            "To: a@example.com\r\n"
            "Subject: Hi\r\n"
            "MIME-Version: 1.0\r\n"
            'Content-Type: multipart/alternative; boundary="BOUNDARY"\r\n'
            "\r\n"
        )
        assert (
            "--BOUNDARY\r\n"
            "Content-Type: text/plain; charset=UTF-8\r\n"
            "Content-Transfer-Encoding: 7bit\r\n"
            "\r\n"
            "Hi\r\n"
        ) in message
        assert (
            "--BOUNDARY\r\n"
            "Content-Type: text/html; charset=UTF-8\r\n"
            "Content-Transfer-Encoding: 7bit\r\n"
            "\r\n"
            "<b>Hi</b>\r\n"
        ) in message
        assert message.endswith("--BOUNDARY--\r\n")
        assert "Reply-To" not in message

    def test_plain_message_uses_body_verbatim(self):
        request = _request(body="<b>kept</b>", isHtml=False)
        message = build_message(request, "sender@example.com", "B")

        assert "\r\n\r\n<b>kept</b>\r\n--B--\r\n" in message
        assert "text/html" not in message

    def test_headers_echo_address_case(self):
        message = build_message(_request(to=["Alice@EXAMPLE.COM"]), "Sender@Example.com", "B")

        assert "From: Sender@Example.com\r\n" in message
        assert "To: Alice@EXAMPLE.COM\r\n" in message

    def test_headers_for_multiple_recipients_and_reply_to(self):
        request = _request(to=["a@example.com", "b@example.com"], replyTo="reply@example.com")
        message = build_message(request, "sender@example.com", "B")

        assert "To: a@example.com, b@example.com\r\n" in message
        assert "Reply-To: reply@example.com\r\n" in message

    def test_message_parses_as_multipart_alternative(self):
        message = build_message(_request(), "sender@example.com")
        parsed = email.message_from_string(message, policy=policy.default)

        assert parsed.get_content_type() == "multipart/alternative"
        parts = list(parsed.iter_parts())
        assert [part.get_content_type() for part in parts] == ["text/plain", "text/html"]
        assert parts[0].get_content().strip() == "Hi"
        assert parts[1].get_content().strip() == "<b>Hi</b>"
