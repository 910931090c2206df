"""Dispatch — 1 試行分のオーケストレーション。

設定ロード → クライアント構築 → PR コンテキスト判定 →
PR 説明文 → コードレビュー → ユニットテスト の順に逐次実行する。
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from github import Github
from pydantic_ai.models import Model

from prpilot.collaborators import (
    generate_code_review_comment,
    generate_pr_description,
    generate_unit_tests_suite,
)
from prpilot.config import collect_inputs, load_run_configuration
from prpilot.engine._clients import create_github_client, create_model_client
from prpilot.engine._event import load_pull_request_context
from prpilot.models.context import PullRequestContext, RepoCoordinates
from prpilot.models.errors import CollaboratorError, ConfigurationError

logger = logging.getLogger(__name__)

PR_DESCRIPTION = "pr-description"
CODE_REVIEW = "code-review"
UNIT_TESTS = "unit-tests"


class AttemptResult(StrEnum):
    """1 試行の正常終了種別。"""

    COMPLETED = "completed"
    SKIPPED = "skipped"


class PRDescriptionGenerator(Protocol):
    def __call__(
        self,
        model: Model,
        model_id: str,
        github: Github,
        *,
        pull_request: PullRequestContext,
    ) -> Awaitable[None]: ...


class CodeReviewGenerator(Protocol):
    def __call__(
        self,
        model: Model,
        model_id: str,
        github: Github,
        exclude_patterns: Sequence[str],
        review_level: str,
        output_language: str,
        *,
        pull_request: PullRequestContext,
    ) -> Awaitable[None]: ...


class UnitTestsGenerator(Protocol):
    def __call__(
        self,
        model: Model,
        model_id: str,
        github: Github,
        repo: RepoCoordinates,
        source_folder: str,
        *,
        pull_request: PullRequestContext,
        exclude_patterns: Sequence[str] = (),
    ) -> Awaitable[None]: ...


@dataclass(frozen=True)
class AttemptDependencies:
    """1 試行が依存する外部協調処理。テストでは差し替える。

    Attributes:
        pr_description: PR 説明文の生成処理。
        code_review: インラインレビューの生成処理。
        unit_tests: ユニットテストの生成処理。
        model_factory: (model_id, region) からモデルを構築する関数。
        github_factory: トークンから GitHub クライアントを構築する関数。
        event_loader: 環境変数から PR コンテキストを取得する関数。
    """

    pr_description: PRDescriptionGenerator = generate_pr_description
    code_review: CodeReviewGenerator = generate_code_review_comment
    unit_tests: UnitTestsGenerator = generate_unit_tests_suite
    model_factory: Callable[[str, str], Model] = create_model_client
    github_factory: Callable[[str], Github] = create_github_client
    event_loader: Callable[
        [Mapping[str, str] | None], PullRequestContext | None
    ] = load_pull_request_context


async def _invoke(name: str, call: Callable[[], Awaitable[None]]) -> None:
    """協調処理を呼び出し、失敗を CollaboratorError に変換する。

    ConfigurationError と CollaboratorError はそのまま伝播する。
    メッセージは元の例外のものを維持し、元の例外は __cause__ に残す。
    """
    try:
        await call()
    except (ConfigurationError, CollaboratorError):
        raise
    except Exception as exc:
        raise CollaboratorError(name, str(exc) or type(exc).__name__) from exc


async def run_attempt(
    overrides: Mapping[str, object] | None = None,
    *,
    env: Mapping[str, str] | None = None,
    deps: AttemptDependencies | None = None,
) -> AttemptResult:
    """1 試行を設定ロードから最後の生成処理まで実行する。

    Args:
        overrides: CLI からの入力オーバーライド。None 値は未指定扱い。
        env: 参照する環境変数。None の場合は ``os.environ``。
        deps: 外部協調処理。None の場合は既定の実装。

    Returns:
        全処理完了時は COMPLETED、PR イベントでない場合は SKIPPED。

    Raises:
        ConfigurationError: トークン未設定、ユニットテストのソースフォルダ未指定など。
        CollaboratorError: クライアント構築または生成処理が失敗した場合。
    """
    d = deps if deps is not None else AttemptDependencies()

    config = load_run_configuration(collect_inputs(env, overrides))

    model = d.model_factory(config.model_id, config.aws_region)
    github = d.github_factory(config.github_token)

    pull_request = d.event_loader(env)
    if pull_request is None:
        logger.info(
            "No pull request found in the context. "
            "This action should be run only on pull request events."
        )
        return AttemptResult.SKIPPED

    repo = pull_request.repo
    logger.info("Reviewing PR #%d in %s", pull_request.number, repo.full_name)

    if config.flags.generate_pr_description:
        await _invoke(
            PR_DESCRIPTION,
            lambda: d.pr_description(
                model, config.model_id, github, pull_request=pull_request
            ),
        )

    if config.flags.generate_code_review:
        await _invoke(
            CODE_REVIEW,
            lambda: d.code_review(
                model,
                config.model_id,
                github,
                config.exclude_patterns,
                config.review_level,
                config.output_language,
                pull_request=pull_request,
            ),
        )

    if config.flags.generate_unit_test:
        logger.info("Start to generate unit test suite")
        if not config.unit_test_source_folder:
            raise ConfigurationError("Test folder path is not specified")
        await _invoke(
            UNIT_TESTS,
            lambda: d.unit_tests(
                model,
                config.model_id,
                github,
                repo,
                config.unit_test_source_folder,
                pull_request=pull_request,
                exclude_patterns=config.unit_test_exclude_patterns,
            ),
        )

    return AttemptResult.COMPLETED
