"""ExitCode IntEnum のテスト。"""

from enum import IntEnum

from prpilot.models.exit_code import ExitCode


class TestExitCodeValues:
    """ExitCode IntEnum の値を検証する。"""

    def test_success_is_zero(self) -> None:
        assert ExitCode.SUCCESS == 0

    def test_failure_is_one(self) -> None:
        assert ExitCode.FAILURE == 1

    def test_has_two_members(self) -> None:
        assert len(ExitCode) == 2

    def test_is_int_enum(self) -> None:
        assert issubclass(ExitCode, IntEnum)
        assert isinstance(ExitCode.FAILURE, int)
