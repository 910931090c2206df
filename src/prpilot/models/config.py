"""実行設定モデル。

アクション入力から構築される 1 試行分の不変な設定レコード。
"""

from __future__ import annotations

from typing import Annotated, Final

from pydantic import Field, StrictBool, StringConstraints

from prpilot.models._base import PrpilotBaseModel

DEFAULT_AWS_REGION: Final[str] = "us-east-1"
DEFAULT_MAX_RETRIES: Final[int] = 3

_Pattern = Annotated[str, StringConstraints(min_length=1)]


class FeatureFlags(PrpilotBaseModel):
    """生成処理ごとの有効/無効フラグ。

    ロード時に一度だけ bool に解釈済みの値を保持する。
    """

    generate_code_review: StrictBool = False
    generate_pr_description: StrictBool = False
    generate_unit_test: StrictBool = False


class RunConfiguration(PrpilotBaseModel):
    """1 試行分の実行設定。

    試行ごとに同じ入力を読み直して再構築され、変更されることはない。
    github_token の非空はローダーで検証済み。
    unit_test_source_folder の非空チェックはディスパッチ時に行う。
    """

    github_token: str = Field(min_length=1, repr=False)
    aws_region: str = Field(default=DEFAULT_AWS_REGION, min_length=1)
    model_id: str = ""
    exclude_patterns: tuple[_Pattern, ...] = ()
    review_level: str = ""
    flags: FeatureFlags = Field(default_factory=FeatureFlags)
    output_language: str = ""
    unit_test_source_folder: str = ""
    unit_test_exclude_patterns: tuple[_Pattern, ...] = ()
