"""実行結果の定義。

status フィールドの固定値で型を一意に特定する判別共用体。
プロセス終了はトップレベルの呼び出し側だけが行う。
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from prpilot.models._base import PrpilotBaseModel
from prpilot.models.errors import ErrorKind


class RunSucceeded(PrpilotBaseModel):
    """実行成功。判別キー: status="succeeded"。

    Attributes:
        status: 判別キー。固定値 "succeeded"。
        attempts: 成功までに要した試行回数（1 以上）。
        skipped: PR 以外のイベントで何もせず終了した場合 True。
    """

    status: Literal["succeeded"] = "succeeded"
    attempts: int = Field(ge=1)
    skipped: bool = False


class RunFailed(PrpilotBaseModel):
    """終端失敗。判別キー: status="failed"。

    Attributes:
        status: 判別キー。固定値 "failed"。
        kind: 最後に発生したエラーの種別。
        message: 失敗アノテーションに出力するメッセージ。
        attempts: 実行した試行回数。試行前に失敗した場合は 0。
    """

    status: Literal["failed"] = "failed"
    kind: ErrorKind
    message: str = Field(min_length=1)
    attempts: int = Field(ge=0)


RunOutcome = Annotated[
    Union[RunSucceeded, RunFailed],
    Field(discriminator="status"),
]
"""実行結果の判別共用体。status フィールドの値で型を自動選択する。"""
