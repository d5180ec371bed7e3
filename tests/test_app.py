"""Tests for configuration loading in the CDK app entry point."""

import json
import logging

import pytest

from app import load_config


@pytest.fixture
def config_files(tmp_path):
    base = {
        "project": {"name": "kafka-lambda-event-sources", "environment": "dev"},
        "observability": {"log_level": "INFO"},
        "event_sources": {"topic": "orders.raw"},
    }
    (tmp_path / "project_config.json").write_text(json.dumps(base))
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "dev.json").write_text(json.dumps({"environment": "dev", "observability": {"log_level": "DEBUG"}}))
    (config_dir / "prod.json").write_text(json.dumps({"environment": "prod"}))
    return tmp_path


def load(config_files):
    return load_config(
        base_path=str(config_files / "project_config.json"),
        config_dir=str(config_files / "config"),
    )


def test_defaults_to_project_environment(config_files, monkeypatch):
    monkeypatch.delenv("CDK_ENV", raising=False)

    config = load(config_files)

    assert config["environment"] == "dev"
    assert config["observability"] == {"log_level": "DEBUG"}
    assert config["event_sources"] == {"topic": "orders.raw"}


def test_cdk_env_selects_environment(config_files, monkeypatch):
    monkeypatch.setenv("CDK_ENV", "prod")

    config = load(config_files)

    assert config["environment"] == "prod"
    assert config["observability"] == {"log_level": "INFO"}


def test_missing_environment_uses_base(config_files, monkeypatch, caplog):
    monkeypatch.setenv("CDK_ENV", "staging")

    with caplog.at_level(logging.WARNING):
        config = load(config_files)

    assert "environment" not in config
    assert config["project"]["name"] == "kafka-lambda-event-sources"
    assert "Environment config not found" in caplog.text
