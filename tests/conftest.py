"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AppSettings
from tests.helpers import PROXY_URL, FakeProxy


@pytest.fixture
def fake_proxy() -> FakeProxy:
    return FakeProxy()


@pytest.fixture
def scratch_root(tmp_path: Path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def settings(scratch_root: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        proxy_url=PROXY_URL,
        scratch_root=scratch_root,
        request_timeout_seconds=10,
        http_timeout_seconds=5,
    )
