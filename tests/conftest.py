"""Mini README: Shared pytest fixtures.

Points the settings at a per-test data directory so no test writes into the
working tree, and clears the cached settings around each test.
"""

from __future__ import annotations

import pytest

from pocketledger.configuration import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("POCKETLEDGER_DATA_DIRECTORY", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
