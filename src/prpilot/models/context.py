"""プルリクエストコンテキストモデル。

トリガーイベントのペイロードから導出される、レビュー対象 PR の情報。
"""

from __future__ import annotations

from pydantic import Field

from prpilot.models._base import PrpilotBaseModel


class RepoCoordinates(PrpilotBaseModel):
    """リポジトリの座標（owner/repo）。"""

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)

    @property
    def full_name(self) -> str:
        """``owner/repo`` 形式のリポジトリ名。"""
        return f"{self.owner}/{self.repo}"


class PullRequestContext(PrpilotBaseModel):
    """トリガーとなったプルリクエストの情報。

    Attributes:
        number: PR 番号。
        repo: PR を所有するリポジトリの座標。
        title: PR タイトル。
        body: PR 本文（未記入の場合は空文字列）。
        head_ref: head ブランチ名。
        head_sha: head コミットの SHA。
        base_ref: base ブランチ名。
    """

    number: int = Field(gt=0)
    repo: RepoCoordinates
    title: str = ""
    body: str = ""
    head_ref: str = ""
    head_sha: str = ""
    base_ref: str = ""
