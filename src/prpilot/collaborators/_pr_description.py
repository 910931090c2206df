"""PR 説明文の生成。

変更ファイルの diff から PR 説明文を生成し、PR 本文を置き換える。
"""

from __future__ import annotations

import logging
from typing import Final

from github import Github
from pydantic import Field
from pydantic_ai import Agent
from pydantic_ai.models import Model

from prpilot.collaborators._github import fetch_changed_files, update_pull_request_body
from prpilot.collaborators._prompt import (
    build_changes_section,
    build_pull_request_header,
)
from prpilot.models._base import PrpilotBaseModel
from prpilot.models.context import PullRequestContext

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT: Final[str] = (
    "You are a senior engineer writing the description of a pull request. "
    "Summarize the purpose of the change in a short paragraph, then list the "
    "notable changes one per item. Describe only what the diff shows."
)


class PRDescription(PrpilotBaseModel):
    """PR 説明文の構造化出力。

    Attributes:
        summary: 変更目的の要約。
        changes: 主な変更点（1 項目 1 変更）。
    """

    summary: str = Field(min_length=1)
    changes: list[str] = Field(default_factory=list)


def render_description(description: PRDescription, model_id: str) -> str:
    """構造化出力を Markdown の PR 本文に整形する。"""
    parts = ["## Summary", "", description.summary.strip()]
    if description.changes:
        parts.extend(["", "## Changes", ""])
        parts.extend(f"- {change.strip()}" for change in description.changes)
    footer = f"Generated by {model_id}" if model_id else "Generated automatically"
    parts.extend(["", "---", f"_{footer}_"])
    return "\n".join(parts)


async def generate_pr_description(
    model: Model | str,
    model_id: str,
    github: Github,
    *,
    pull_request: PullRequestContext,
) -> None:
    """PR 説明文を生成し、PR 本文を更新する。

    Args:
        model: pydantic-ai モデル（試行ごとに構築されたもの）。
        model_id: モデル ID（本文のフッターに記載）。
        github: GitHub クライアント。
        pull_request: 対象 PR。
    """
    files = await fetch_changed_files(github, pull_request)
    agent = Agent(model, output_type=PRDescription, system_prompt=_SYSTEM_PROMPT)
    result = await agent.run(
        f"{build_pull_request_header(pull_request)}\n\n{build_changes_section(files)}"
    )
    await update_pull_request_body(
        github, pull_request, render_description(result.output, model_id)
    )
    logger.info("Updated description of PR #%d", pull_request.number)
