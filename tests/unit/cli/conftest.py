"""CLI テスト共通フィクスチャ。"""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def _no_logging_setup() -> Iterator[MagicMock]:
    """ルートロガーの再設定でテスト間のログ捕捉が壊れることを防止する。"""
    with patch("prpilot.cli._app._configure_logging") as mock:
        yield mock


@pytest.fixture(autouse=True)
def _wide_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    """Rich のヘルプ出力がオプション名を省略しないよう端末幅を固定する。"""
    monkeypatch.setenv("COLUMNS", "200")
