"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fakes import FakeChainRunner


@pytest.fixture
def fake_runner() -> FakeChainRunner:
    return FakeChainRunner()


@pytest.fixture
def spn_home(tmp_path) -> Path:
    return tmp_path / "spn"
