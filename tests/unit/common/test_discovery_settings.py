"""Tests for environment-driven discovery settings."""

import pytest

from schema_discovery.common.config import DiscoverySettings, get_env_bool, get_env_list


def test_defaults_when_environment_is_empty():
    settings = DiscoverySettings.from_env()
    assert settings.strict is False
    assert settings.schema_name is None
    assert settings.exclude_tables == []


def test_from_env_reads_all_variables(monkeypatch):
    monkeypatch.setenv("SCHEMA_DISCOVERY_STRICT", "yes")
    monkeypatch.setenv("SCHEMA_DISCOVERY_SCHEMA", "sakila")
    monkeypatch.setenv("SCHEMA_DISCOVERY_EXCLUDE_TABLES", "audit_log, ,tmp")
    settings = DiscoverySettings.from_env()
    assert settings.strict is True
    assert settings.schema_name == "sakila"
    assert settings.exclude_tables == ["audit_log", "tmp"]


def test_empty_schema_name_means_engine_default(monkeypatch):
    monkeypatch.setenv("SCHEMA_DISCOVERY_SCHEMA", "")
    assert DiscoverySettings.from_env().schema_name is None


def test_settings_are_immutable():
    settings = DiscoverySettings()
    with pytest.raises(Exception):
        settings.strict = True


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("1", True), ("ON", True), ("false", False), ("0", False), ("", False)],
)
def test_get_env_bool_values(monkeypatch, raw, expected):
    monkeypatch.setenv("SD_TEST_FLAG", raw)
    assert get_env_bool("SD_TEST_FLAG") is expected


def test_get_env_bool_rejects_garbage(monkeypatch):
    monkeypatch.setenv("SD_TEST_FLAG", "maybe")
    with pytest.raises(ValueError, match="must be a boolean"):
        get_env_bool("SD_TEST_FLAG")


def test_get_env_required_missing_raises(monkeypatch):
    monkeypatch.delenv("SD_TEST_LIST", raising=False)
    with pytest.raises(KeyError):
        get_env_list("SD_TEST_LIST", required=True)
