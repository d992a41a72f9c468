# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for the SES MCP tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ses_mcp.api import create_app
from ses_mcp.config import ServerConfig


@pytest.fixture
def config() -> ServerConfig:
    return ServerConfig(
        ses_username="smtp-user",
        ses_password="smtp-pass",
        aws_region="eu-west-1",
        default_from="sender@example.com",
        protocol_version="2024-11-05",
        provider="aws-ses-smtp",
    )


@pytest.fixture
def client(config) -> TestClient:
    return TestClient(create_app(config))
