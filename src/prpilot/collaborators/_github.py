"""GitHub 操作 — PyGithub 呼び出しの非同期ラッパー。

PyGithub は同期 API のため、各操作を asyncio.to_thread でワーカースレッドに逃がす。
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from github import Github, GithubException
from github.Repository import Repository
from pydantic import Field

from prpilot.models._base import PrpilotBaseModel
from prpilot.models.context import PullRequestContext, RepoCoordinates

logger = logging.getLogger(__name__)

_UNPROCESSABLE = 422
_NOT_FOUND = 404


class ChangedFile(PrpilotBaseModel):
    """PR で変更されたファイル。

    Attributes:
        path: リポジトリルートからの相対パス。
        status: 変更種別（added, modified, removed, renamed 等）。
        patch: ファイル単位の diff。バイナリや巨大ファイルでは空文字列。
    """

    path: str = Field(min_length=1)
    status: str = ""
    patch: str = ""


class FileContent(PrpilotBaseModel):
    """コミット対象のファイル内容。"""

    path: str = Field(min_length=1)
    content: str


class InlineComment(PrpilotBaseModel):
    """レビューに添付する行コメント（新ファイル側）。"""

    path: str = Field(min_length=1)
    line: int = Field(gt=0)
    body: str = Field(min_length=1)


def _get_repo(github: Github, repo: RepoCoordinates) -> Repository:
    return github.get_repo(repo.full_name)


async def fetch_changed_files(
    github: Github, pull_request: PullRequestContext
) -> list[ChangedFile]:
    """PR の変更ファイル一覧を取得する。"""

    def _fetch() -> list[ChangedFile]:
        pr = _get_repo(github, pull_request.repo).get_pull(pull_request.number)
        return [
            ChangedFile(path=f.filename, status=f.status or "", patch=f.patch or "")
            for f in pr.get_files()
        ]

    return await asyncio.to_thread(_fetch)


async def update_pull_request_body(
    github: Github, pull_request: PullRequestContext, body: str
) -> None:
    """PR 本文を置き換える。"""

    def _update() -> None:
        pr = _get_repo(github, pull_request.repo).get_pull(pull_request.number)
        pr.edit(body=body)

    await asyncio.to_thread(_update)


async def post_review(
    github: Github,
    pull_request: PullRequestContext,
    body: str,
    comments: Sequence[InlineComment],
) -> None:
    """head コミットに対して COMMENT レビューを 1 件投稿する。"""

    def _post() -> None:
        repo = _get_repo(github, pull_request.repo)
        pr = repo.get_pull(pull_request.number)
        head_sha = pull_request.head_sha or pr.head.sha
        pr.create_review(
            commit=repo.get_commit(head_sha),
            body=body,
            event="COMMENT",
            comments=[
                {"path": c.path, "line": c.line, "side": "RIGHT", "body": c.body}
                for c in comments
            ],
        )

    await asyncio.to_thread(_post)


async def list_files(github: Github, repo: RepoCoordinates, ref: str) -> list[str]:
    """ref 時点のリポジトリ内の全ファイルパスを取得する。"""

    def _list() -> list[str]:
        tree = _get_repo(github, repo).get_git_tree(ref, recursive=True)
        return [entry.path for entry in tree.tree if entry.type == "blob"]

    return await asyncio.to_thread(_list)


async def read_file(
    github: Github, repo: RepoCoordinates, path: str, ref: str
) -> str:
    """ref 時点のファイル内容を UTF-8 テキストとして取得する。

    Raises:
        ValueError: path がディレクトリを指している場合。
    """

    def _read() -> str:
        content = _get_repo(github, repo).get_contents(path, ref=ref)
        if isinstance(content, list):
            raise ValueError(f"'{path}' is a directory, not a file")
        return content.decoded_content.decode("utf-8", errors="replace")

    return await asyncio.to_thread(_read)


async def commit_files_as_pull_request(
    github: Github,
    repo: RepoCoordinates,
    *,
    branch: str,
    base_ref: str,
    base_sha: str,
    files: Sequence[FileContent],
    title: str,
    body: str,
) -> int:
    """base_sha から branch を作成してファイルをコミットし、base_ref 向けの PR を開く。

    再試行で同じ操作を繰り返しても重複しないよう、既存のブランチ・ファイル・
    オープン中の PR は再利用する。

    Returns:
        作成または再利用した PR 番号。
    """

    def _commit() -> int:
        gh_repo = _get_repo(github, repo)
        try:
            gh_repo.create_git_ref(ref=f"refs/heads/{branch}", sha=base_sha)
        except GithubException as exc:
            if exc.status != _UNPROCESSABLE:
                raise
            logger.info("Branch %s already exists; reusing it", branch)

        for file in files:
            message = f"test: add generated unit tests for {file.path}"
            try:
                existing = gh_repo.get_contents(file.path, ref=branch)
            except GithubException as exc:
                if exc.status != _NOT_FOUND:
                    raise
                gh_repo.create_file(file.path, message, file.content, branch=branch)
                continue
            if isinstance(existing, list):
                raise ValueError(f"'{file.path}' is a directory on {branch}")
            gh_repo.update_file(
                file.path, message, file.content, existing.sha, branch=branch
            )

        for pr in gh_repo.get_pulls(state="open", head=f"{repo.owner}:{branch}"):
            logger.info("Pull request #%d for %s already open", pr.number, branch)
            return pr.number

        pr = gh_repo.create_pull(base=base_ref, head=branch, title=title, body=body)
        return pr.number

    return await asyncio.to_thread(_commit)
