from __future__ import annotations

import pytest
from moto import mock_aws

from sqsdemo.bus.sqs import SQSBus, SQSConfig


@pytest.fixture
def aws_env(monkeypatch, tmp_path):
    """Fake credentials and a clean working directory (no .env or appsettings.json)."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    return tmp_path


@pytest.fixture
def bus(aws_env):
    with mock_aws():
        yield SQSBus(SQSConfig(region="us-east-1"))
