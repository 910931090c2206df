"""実行失敗の分類。

リトライ対象となる「認識済みエラー」と、即時終了となる未知のエラーを
閉じた列挙 ErrorKind で区別する。
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """実行失敗の種別。

    CONFIGURATION と COLLABORATOR はリトライ予算の範囲で再試行される。
    UNKNOWN は予算に関係なく再試行されない。
    """

    CONFIGURATION = "configuration"
    COLLABORATOR = "collaborator"
    UNKNOWN = "unknown"


class ConfigurationError(Exception):
    """設定不備による実行失敗。

    トークン未設定、ユニットテスト生成時のソースフォルダ未指定、
    イベントペイロードの読み込み失敗などを表す。
    """


class CollaboratorError(Exception):
    """外部協調処理（クライアント構築・生成処理）の失敗。

    Attributes:
        collaborator: 失敗した協調処理の名前。
    """

    def __init__(self, collaborator: str, message: str) -> None:
        super().__init__(message)
        self.collaborator = collaborator


def classify_error(exc: BaseException) -> ErrorKind:
    """例外を ErrorKind に分類する。

    Args:
        exc: 分類対象の例外。

    Returns:
        ConfigurationError → CONFIGURATION、CollaboratorError → COLLABORATOR、
        それ以外 → UNKNOWN。
    """
    if isinstance(exc, ConfigurationError):
        return ErrorKind.CONFIGURATION
    if isinstance(exc, CollaboratorError):
        return ErrorKind.COLLABORATOR
    return ErrorKind.UNKNOWN
