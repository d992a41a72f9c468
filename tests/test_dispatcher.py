# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for tools/call dispatch."""

import json

import pytest

from ses_mcp import handlers
from ses_mcp.dispatcher import FALLBACK_ERROR_MESSAGE, handle_tool_call, text_content
from ses_mcp.jsonrpc import INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND, RpcRequest


def _call(params, request_id=7):
    return RpcRequest(jsonrpc="2.0", method="tools/call", params=params, id=request_id)


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [None, {}, {"name": ""}, {"arguments": {}}, ["send_email"]])
async def test_missing_tool_name_is_invalid_params(config, params):
    response = await handle_tool_call(_call(params), config)

    assert response["error"]["code"] == INVALID_PARAMS
    assert response["error"]["message"] == "Invalid params - tool name required"
    assert response["id"] == 7
    assert "result" not in response


@pytest.mark.asyncio
async def test_unknown_tool_is_not_found(config):
    response = await handle_tool_call(_call({"name": "delete_everything"}), config)

    assert response["error"] == {"code": METHOD_NOT_FOUND, "message": "Tool not found: delete_everything"}


@pytest.mark.asyncio
async def test_send_email_result_is_pretty_printed_text(config):
    params = {"name": "send_email", "arguments": {"to": ["a@example.com"], "subject": "Hi", "body": "<b>Hi</b>"}}
    response = await handle_tool_call(_call(params, request_id="abc"), config)

    assert response["id"] == "abc"
    content = response["result"]["content"]
    assert len(content) == 1
    assert content[0]["type"] == "text"
    payload = json.loads(content[0]["text"])
    assert payload["success"] is True
    assert payload["messageId"]
    assert content[0]["text"].startswith('{\n  "success": true')


@pytest.mark.asyncio
async def test_validation_failure_becomes_internal_error(config):
    params = {"name": "send_email", "arguments": {"to": ["a@example.com"], "subject": "", "body": "x"}}
    response = await handle_tool_call(_call(params), config)

    assert response["error"]["code"] == INTERNAL_ERROR
    assert "subject" in response["error"]["message"]


@pytest.mark.asyncio
async def test_validation_failure_is_logged_with_its_code(config, caplog):
    caplog.set_level("WARNING", logger="SesMcp.dispatcher")
    params = {"name": "send_email", "arguments": {"to": ["a@example.com"], "subject": "", "body": "x"}}
    await handle_tool_call(_call(params), config)

    assert "Rejected send_email call (invalid_arguments)" in caplog.text


@pytest.mark.asyncio
async def test_string_results_are_used_verbatim(config, monkeypatch):
    async def fake(arguments, cfg):
        return "plain answer"

    monkeypatch.setitem(handlers.HANDLERS, "get_email_quota", fake)
    response = await handle_tool_call(_call({"name": "get_email_quota"}), config)

    assert response["result"] == {"content": [{"type": "text", "text": "plain answer"}]}


@pytest.mark.asyncio
@pytest.mark.parametrize("exc, message", [(RuntimeError("boom"), "boom"), (RuntimeError(), FALLBACK_ERROR_MESSAGE)])
async def test_handler_failures_are_wrapped(config, monkeypatch, exc, message):
    async def failing(arguments, cfg):
        raise exc

    monkeypatch.setitem(handlers.HANDLERS, "get_email_quota", failing)
    response = await handle_tool_call(_call({"name": "get_email_quota"}), config)

    assert response["error"] == {"code": INTERNAL_ERROR, "message": message}


def test_text_content_for_structured_results():
    block = text_content({"a": 1})
    assert block == {"content": [{"type": "text", "text": '{\n  "a": 1\n}'}]}
