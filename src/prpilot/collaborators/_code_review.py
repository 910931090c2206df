"""インラインコードレビューの生成。

除外パターンに該当しない変更ファイルの diff をレビューし、
変更行に対するコメントを 1 件のレビューとして投稿する。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import StrEnum
from typing import Final

from github import Github
from pydantic import Field
from pydantic_ai import Agent
from pydantic_ai.models import Model

from prpilot.collaborators._github import (
    ChangedFile,
    InlineComment,
    fetch_changed_files,
    post_review,
)
from prpilot.collaborators._patterns import commentable_lines, is_excluded
from prpilot.collaborators._prompt import (
    build_changes_section,
    build_pull_request_header,
    language_instruction,
)
from prpilot.models._base import PrpilotBaseModel, normalize_enum_value
from prpilot.models.context import PullRequestContext

logger = logging.getLogger(__name__)


class ReviewLevel(StrEnum):
    """レビューの詳細度。"""

    CONCISE = "concise"
    DETAILED = "detailed"


_LEVEL_INSTRUCTIONS: Final[dict[ReviewLevel, str]] = {
    ReviewLevel.CONCISE: (
        "Only comment on bugs, security problems and clear correctness issues. "
        "Skip style and naming remarks."
    ),
    ReviewLevel.DETAILED: (
        "Comment on bugs, security problems, error handling, performance, "
        "readability and maintainability."
    ),
}

_BASE_SYSTEM_PROMPT: Final[str] = (
    "You are an experienced code reviewer. Review the diff of each changed file "
    "and return inline comments. Each comment must reference a file path exactly "
    "as shown and a line number of the new version of the file that appears in "
    "the diff. Return an empty list when nothing needs to be said."
)


class ReviewComment(PrpilotBaseModel):
    """モデルが返すレビューコメント。"""

    path: str = Field(min_length=1)
    line: int = Field(gt=0)
    body: str = Field(min_length=1)


class ReviewOutput(PrpilotBaseModel):
    """コードレビューの構造化出力。"""

    comments: list[ReviewComment] = Field(default_factory=list)


def resolve_review_level(raw: str) -> ReviewLevel:
    """レビューレベル入力を解釈する。未指定・不明な値は DETAILED。"""
    try:
        return ReviewLevel(normalize_enum_value(raw, ReviewLevel))
    except ValueError:
        pass
    if raw:
        logger.warning(
            "Unknown review level %r; falling back to '%s'",
            raw,
            ReviewLevel.DETAILED.value,
        )
    return ReviewLevel.DETAILED


def build_review_system_prompt(level: ReviewLevel, output_language: str) -> str:
    """レビューレベルと出力言語を反映したシステムプロンプトを構築する。"""
    parts = [_BASE_SYSTEM_PROMPT, _LEVEL_INSTRUCTIONS[level]]
    language = language_instruction(output_language)
    if language:
        parts.append(language)
    return "\n\n".join(parts)


def select_reviewable_files(
    files: Sequence[ChangedFile], exclude_patterns: Sequence[str]
) -> list[ChangedFile]:
    """diff を持ち、除外パターンに該当しないファイルを抽出する。"""
    return [
        f
        for f in files
        if f.patch and f.status != "removed" and not is_excluded(f.path, exclude_patterns)
    ]


def anchor_comments(
    comments: Sequence[ReviewComment], files: Sequence[ChangedFile]
) -> list[InlineComment]:
    """diff 上に存在する行を指すコメントだけを残す。

    GitHub は diff 外の行へのコメントを拒否するため、
    対象ファイル外・対象行外のコメントは破棄する。
    """
    lines_by_path = {f.path: commentable_lines(f.patch) for f in files}
    anchored: list[InlineComment] = []
    for comment in comments:
        allowed = lines_by_path.get(comment.path)
        if allowed is None or comment.line not in allowed:
            logger.debug(
                "Dropping comment outside the diff: %s:%d", comment.path, comment.line
            )
            continue
        anchored.append(
            InlineComment(path=comment.path, line=comment.line, body=comment.body)
        )
    return anchored


async def generate_code_review_comment(
    model: Model | str,
    model_id: str,
    github: Github,
    exclude_patterns: Sequence[str],
    review_level: str,
    output_language: str,
    *,
    pull_request: PullRequestContext,
) -> None:
    """変更ファイルをレビューし、インラインコメントを投稿する。

    レビュー対象ファイルがない場合、または diff 上に残るコメントがない場合は
    何も投稿しない。

    Args:
        model: pydantic-ai モデル。
        model_id: モデル ID（レビュー本文に記載）。
        github: GitHub クライアント。
        exclude_patterns: 除外する fnmatch パターン。
        review_level: レビューの詳細度（"concise" / "detailed"）。
        output_language: コメントの記述言語。空の場合はモデルに任せる。
        pull_request: 対象 PR。
    """
    files = select_reviewable_files(
        await fetch_changed_files(github, pull_request), exclude_patterns
    )
    if not files:
        logger.info("No reviewable files in PR #%d", pull_request.number)
        return

    level = resolve_review_level(review_level)
    agent = Agent(
        model,
        output_type=ReviewOutput,
        system_prompt=build_review_system_prompt(level, output_language),
    )
    result = await agent.run(
        f"{build_pull_request_header(pull_request)}\n\n{build_changes_section(files)}"
    )

    comments = anchor_comments(result.output.comments, files)
    if not comments:
        logger.info("No review comments for PR #%d", pull_request.number)
        return

    reviewer = model_id or "the review model"
    await post_review(
        github,
        pull_request,
        body=f"Automated {level.value} review by {reviewer}.",
        comments=comments,
    )
    logger.info(
        "Posted %d review comment(s) on PR #%d", len(comments), pull_request.number
    )
