"""生成処理共通のプロンプト部品。"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from prpilot.collaborators._github import ChangedFile
from prpilot.models.context import PullRequestContext

MAX_PATCH_CHARS: Final[int] = 8000
"""1 ファイルあたりプロンプトに含める diff の上限文字数。"""

_TRUNCATION_NOTICE: Final[str] = "\n... (truncated)"


def truncate(text: str, limit: int) -> str:
    """limit 文字を超えるテキストを切り詰め、切り詰めた旨を末尾に付す。"""
    if len(text) <= limit:
        return text
    return text[:limit] + _TRUNCATION_NOTICE


def build_pull_request_header(pull_request: PullRequestContext) -> str:
    """PR のメタデータセクションを構築する。"""
    lines = [
        f"## Pull Request #{pull_request.number} in {pull_request.repo.full_name}",
        f"Title: {pull_request.title or '(none)'}",
    ]
    if pull_request.base_ref and pull_request.head_ref:
        lines.append(f"Branches: {pull_request.head_ref} -> {pull_request.base_ref}")
    if pull_request.body:
        lines.extend(["", "Current description:", pull_request.body])
    return "\n".join(lines)


def build_changes_section(files: Sequence[ChangedFile]) -> str:
    """変更ファイルごとの diff セクションを構築する。"""
    sections: list[str] = ["## Changed files"]
    for f in files:
        sections.append(f"### {f.path} ({f.status or 'modified'})")
        if f.patch:
            sections.append(f"```diff\n{truncate(f.patch, MAX_PATCH_CHARS)}\n```")
        else:
            sections.append("(no textual diff)")
    return "\n\n".join(sections)


def language_instruction(output_language: str) -> str:
    """出力言語の指示文を返す。未指定の場合は空文字列。"""
    if not output_language:
        return ""
    return f"Write all natural-language text in {output_language}."
