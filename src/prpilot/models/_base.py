"""全ドメインモデルの基底クラスと共通ユーティリティ。

extra="forbid" と frozen=True による厳格・不変モードを一元管理する。
"""

from enum import StrEnum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict


class PrpilotBaseModel(BaseModel):
    """全ドメインモデルの基底クラス。

    未知フィールドを拒否し、生成後の変更を禁止する。試行ごとに再構築される
    設定・コンテキストが途中で書き換えられないことを保証する。
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


E = TypeVar("E", bound=StrEnum)


def normalize_enum_value(v: object, enum_cls: type[E]) -> object:
    """StrEnum 入力を正規化する（大文字小文字非依存）。

    str 入力を前後の空白を除去したうえで enum_cls のメンバー値と
    case-insensitive でマッチし、正規の値文字列に変換する。
    マッチしない str や str 以外の入力はそのまま返し、
    後続の Pydantic バリデーションに委ねる。

    Args:
        v: バリデーション対象の入力値。
        enum_cls: マッチ対象の StrEnum クラス。

    Returns:
        正規化された値文字列、またはマッチしない場合は入力値そのまま。
    """
    if isinstance(v, str):
        for member in enum_cls:
            if v.strip().lower() == member.value.lower():
                return member.value
    return v
