"""ユニットテストスイートの生成。

PR head 時点のソースフォルダ配下のファイルからテストを生成し、
専用ブランチにコミットして PR head ブランチ向けの PR を開く。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Final

from github import Github
from pydantic import Field
from pydantic_ai import Agent
from pydantic_ai.models import Model

from prpilot.collaborators._github import (
    FileContent,
    commit_files_as_pull_request,
    list_files,
    read_file,
)
from prpilot.collaborators._patterns import (
    is_excluded,
    is_safe_relative_path,
    is_within_folder,
)
from prpilot.collaborators._prompt import truncate
from prpilot.models._base import PrpilotBaseModel
from prpilot.models.context import PullRequestContext, RepoCoordinates

logger = logging.getLogger(__name__)

MAX_SOURCE_FILES: Final[int] = 20
"""1 回の生成でプロンプトに含めるソースファイル数の上限。"""

MAX_SOURCE_CHARS: Final[int] = 12000
"""1 ファイルあたりプロンプトに含める文字数の上限。"""

BRANCH_PREFIX: Final[str] = "prpilot/unit-tests-pr-"

_SYSTEM_PROMPT: Final[str] = (
    "You are a software engineer writing unit tests. For the given source files, "
    "write a runnable unit-test suite using the testing framework conventional for "
    "the language of the sources. Return one entry per test file with a path "
    "relative to the repository root and the full file content."
)


class GeneratedTestFile(PrpilotBaseModel):
    """生成されたテストファイル。"""

    path: str = Field(min_length=1)
    content: str = Field(min_length=1)


class UnitTestSuite(PrpilotBaseModel):
    """ユニットテスト生成の構造化出力。"""

    files: list[GeneratedTestFile] = Field(default_factory=list)


def select_source_files(
    paths: Sequence[str],
    source_folder: str,
    exclude_patterns: Sequence[str],
) -> list[str]:
    """ソースフォルダ配下かつ除外パターンに該当しないパスを抽出する。

    パス順に並べ、MAX_SOURCE_FILES 件で打ち切る。
    """
    selected = sorted(
        p
        for p in paths
        if is_within_folder(p, source_folder) and not is_excluded(p, exclude_patterns)
    )
    if len(selected) > MAX_SOURCE_FILES:
        logger.warning(
            "Found %d source files under %s; using the first %d",
            len(selected),
            source_folder,
            MAX_SOURCE_FILES,
        )
    return selected[:MAX_SOURCE_FILES]


def build_sources_prompt(sources: dict[str, str]) -> str:
    """ソースファイルの内容をまとめたユーザーメッセージを構築する。"""
    sections = ["## Source files"]
    for path, content in sources.items():
        sections.append(f"### {path}\n```\n{truncate(content, MAX_SOURCE_CHARS)}\n```")
    return "\n\n".join(sections)


def collect_test_files(suite: UnitTestSuite) -> list[FileContent]:
    """安全な相対パスを持つテストファイルだけを残す。同じパスは最初の 1 件のみ。"""
    files: list[FileContent] = []
    seen: set[str] = set()
    for generated in suite.files:
        path = generated.path.strip().removeprefix("./")
        if not is_safe_relative_path(path):
            logger.warning("Skipping generated test with unsafe path %r", generated.path)
            continue
        if path in seen:
            continue
        seen.add(path)
        files.append(FileContent(path=path, content=generated.content))
    return files


async def generate_unit_tests_suite(
    model: Model | str,
    model_id: str,
    github: Github,
    repo: RepoCoordinates,
    source_folder: str,
    *,
    pull_request: PullRequestContext,
    exclude_patterns: Sequence[str] = (),
) -> None:
    """ユニットテストスイートを生成し、PR として提案する。

    Args:
        model: pydantic-ai モデル。
        model_id: モデル ID（PR 本文に記載）。
        github: GitHub クライアント。
        repo: 対象リポジトリの座標。
        source_folder: テスト対象のソースフォルダ（リポジトリルートからの相対パス）。
        pull_request: 対象 PR。head ブランチと head SHA を使用する。
        exclude_patterns: テスト対象から除外する fnmatch パターン。
    """
    ref = pull_request.head_sha or pull_request.head_ref
    paths = select_source_files(
        await list_files(github, repo, ref), source_folder, exclude_patterns
    )
    if not paths:
        logger.info("No source files found under %s", source_folder)
        return

    sources: dict[str, str] = {}
    for path in paths:
        sources[path] = await read_file(github, repo, path, ref)

    agent = Agent(model, output_type=UnitTestSuite, system_prompt=_SYSTEM_PROMPT)
    result = await agent.run(build_sources_prompt(sources))

    files = collect_test_files(result.output)
    if not files:
        logger.info("Model returned no usable test files")
        return

    generator = model_id or "the test generation model"
    number = await commit_files_as_pull_request(
        github,
        repo,
        branch=f"{BRANCH_PREFIX}{pull_request.number}",
        base_ref=pull_request.head_ref,
        base_sha=pull_request.head_sha,
        files=files,
        title=f"Add generated unit tests for #{pull_request.number}",
        body=(
            f"Unit tests for `{source_folder}` generated by {generator} "
            f"for #{pull_request.number}."
        ),
    )
    logger.info("Opened unit test pull request #%d with %d file(s)", number, len(files))
