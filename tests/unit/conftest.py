"""Unit test environment helpers."""

import pytest

from schema_discovery.common.config.settings import (
    EXCLUDE_TABLES_ENV,
    PROVIDER_ENV,
    SCHEMA_ENV,
    STRICT_ENV,
)


@pytest.fixture(autouse=True)
def _clean_discovery_env(monkeypatch):
    """Unit tests never inherit SCHEMA_DISCOVERY_* settings from the shell."""
    for name in (PROVIDER_ENV, STRICT_ENV, SCHEMA_ENV, EXCLUDE_TABLES_ENV):
        monkeypatch.delenv(name, raising=False)
    yield
