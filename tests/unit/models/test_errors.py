"""エラー分類のテスト。"""

import pytest

from prpilot.models.errors import (
    CollaboratorError,
    ConfigurationError,
    ErrorKind,
    classify_error,
)


class TestErrorKind:
    """ErrorKind StrEnum のテスト。"""

    def test_values(self) -> None:
        assert ErrorKind.CONFIGURATION == "configuration"
        assert ErrorKind.COLLABORATOR == "collaborator"
        assert ErrorKind.UNKNOWN == "unknown"

    def test_member_count(self) -> None:
        """閉じた列挙であること（3 メンバー）。"""
        assert len(ErrorKind) == 3


class TestClassifyError:
    """classify_error のテスト。"""

    def test_configuration_error(self) -> None:
        assert classify_error(ConfigurationError("x")) is ErrorKind.CONFIGURATION

    def test_collaborator_error(self) -> None:
        exc = CollaboratorError("code-review", "boom")
        assert classify_error(exc) is ErrorKind.COLLABORATOR

    @pytest.mark.parametrize(
        "exc",
        [RuntimeError("x"), ValueError("x"), KeyError("x"), TypeError()],
    )
    def test_other_exceptions_are_unknown(self, exc: Exception) -> None:
        """認識済みエラー以外は UNKNOWN に分類されること。"""
        assert classify_error(exc) is ErrorKind.UNKNOWN


class TestCollaboratorError:
    """CollaboratorError のテスト。"""

    def test_keeps_collaborator_name_and_message(self) -> None:
        exc = CollaboratorError("pr-description", "rate limited")
        assert exc.collaborator == "pr-description"
        assert str(exc) == "rate limited"
