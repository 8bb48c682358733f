"""Tests for the StackConfig environment-driven settings class."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from vmconn_infra.config import CloudProvider, StackConfig


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)


def test_cloud_provider_values() -> None:
    assert CloudProvider.AWS == "aws"
    assert CloudProvider.GCP == "gcp"
    assert CloudProvider.AZURE == "azure"


def test_stack_config_load(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMCONN_CLOUD_PROVIDER", "azure")
    config = StackConfig.load()
    assert config.cloud_provider == CloudProvider.AZURE
    assert config.subscription_id == ""
    assert config.vm_id == ""
    assert config.windows is None
    assert config.lookup_timeout is None
    assert config.log_level == "INFO"
    assert config.environment == "prod"


def test_stack_config_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMCONN_CLOUD_PROVIDER", "azure")
    monkeypatch.setenv("VMCONN_SUBSCRIPTION_ID", "00000000-0000-0000-0000-000000000000")
    monkeypatch.setenv(
        "VMCONN_VM_ID",
        "/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg-web"
        "/providers/Microsoft.Compute/virtualMachines/web-0",
    )
    monkeypatch.setenv("VMCONN_WINDOWS", "true")
    monkeypatch.setenv("VMCONN_LOOKUP_TIMEOUT", "2.5")
    monkeypatch.setenv("VMCONN_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("VMCONN_ENVIRONMENT", "staging")
    config = StackConfig.load()
    assert config.subscription_id == "00000000-0000-0000-0000-000000000000"
    assert config.vm_id.endswith("/virtualMachines/web-0")
    assert config.windows is True
    assert config.lookup_timeout == 2.5
    assert config.log_level_number == logging.DEBUG
    assert config.environment == "staging"


def test_stack_config_requires_cloud_provider(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VMCONN_CLOUD_PROVIDER", raising=False)
    with pytest.raises(ValidationError):
        StackConfig.load()


def test_stack_config_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VMCONN_CLOUD_PROVIDER", "azure")
    monkeypatch.setenv("VMCONN_LOG_LEVEL", "CHATTY")
    with pytest.raises(ValidationError):
        StackConfig.load()
