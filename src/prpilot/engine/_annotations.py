"""GitHub Actions ワークフローコマンドの出力。

``::error::`` / ``::warning::`` 行を stdout に書き出し、
ジョブのアノテーションとして表示させる。
"""

from __future__ import annotations

import sys
from typing import Final, TextIO

_ESCAPES: Final[tuple[tuple[str, str], ...]] = (
    ("%", "%25"),
    ("\r", "%0D"),
    ("\n", "%0A"),
)
"""メッセージ部のエスケープ対応表。% を最初に置換する。"""


def escape_data(text: str) -> str:
    """ワークフローコマンドのメッセージ部をエスケープする。"""
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def _issue_command(command: str, message: str, stream: TextIO | None) -> None:
    out = sys.stdout if stream is None else stream
    print(f"::{command}::{escape_data(message)}", file=out, flush=True)


def emit_error(message: str, stream: TextIO | None = None) -> None:
    """エラーアノテーションを出力する。"""
    _issue_command("error", message, stream)


def emit_warning(message: str, stream: TextIO | None = None) -> None:
    """警告アノテーションを出力する。"""
    _issue_command("warning", message, stream)
