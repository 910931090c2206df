"""ワークフローコマンド出力のテスト。"""

from __future__ import annotations

import io

import pytest

from prpilot.engine._annotations import emit_error, emit_warning, escape_data


class TestEscapeData:
    """escape_data のテスト。"""

    def test_plain_text_unchanged(self) -> None:
        assert escape_data("GitHub token is not set") == "GitHub token is not set"

    def test_newlines_escaped(self) -> None:
        assert escape_data("a\r\nb") == "a%0D%0Ab"

    def test_percent_escaped_first(self) -> None:
        """% を先に置換し、エスケープ結果を二重にエスケープしないこと。"""
        assert escape_data("100%\n") == "100%25%0A"


class TestEmit:
    """emit_error / emit_warning のテスト。"""

    def test_error_to_stream(self) -> None:
        buf = io.StringIO()
        emit_error("boom", stream=buf)
        assert buf.getvalue() == "::error::boom\n"

    def test_warning_to_stream(self) -> None:
        buf = io.StringIO()
        emit_warning("Retrying... Attempts remaining: 2", stream=buf)
        assert buf.getvalue() == "::warning::Retrying... Attempts remaining: 2\n"

    def test_defaults_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        emit_error("line1\nline2")
        assert capsys.readouterr().out == "::error::line1%0Aline2\n"
