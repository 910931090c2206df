"""除外パターン — fnmatch ベースのファイルパス判定と diff ハンク解析。"""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Iterable
from pathlib import PurePosixPath
from typing import Final

_HUNK_HEADER_RE: Final[re.Pattern[str]] = re.compile(
    r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,(\d+))? @@"
)
"""unified diff のハンクヘッダーから新ファイル側の開始行を抽出するパターン。"""


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    """パスが除外パターンのいずれかにマッチするか判定する。

    fnmatch でパス全体と basename の両方に対してマッチングを行う。
    ``*.md`` は全階層の Markdown に、``docs/*`` はパス全体にマッチする。
    """
    name = PurePosixPath(path).name
    return any(
        fnmatch.fnmatch(path, pattern) or fnmatch.fnmatch(name, pattern)
        for pattern in patterns
    )


def is_within_folder(path: str, folder: str) -> bool:
    """パスが folder 配下にあるか判定する。

    folder は前後の ``/`` と先頭の ``./`` を無視して比較する。
    ``"."`` または空の folder はリポジトリ全体を意味する。
    """
    normalized = folder.strip().removeprefix("./").strip("/")
    if normalized in ("", "."):
        return True
    return path == normalized or path.startswith(f"{normalized}/")


def is_safe_relative_path(path: str) -> bool:
    """リポジトリ内の相対パスとして安全か判定する。

    絶対パスと ``..`` を含むパスは拒否する。
    """
    if not path or path.startswith("/") or "\\" in path:
        return False
    return ".." not in PurePosixPath(path).parts


def commentable_lines(patch: str) -> frozenset[int]:
    """パッチ中でレビューコメントを付けられる新ファイル側の行番号を返す。

    追加行とコンテキスト行が対象。削除行は新ファイル側に存在しないため除く。

    Args:
        patch: GitHub API が返すファイル単位の unified diff（ハンク部分のみ）。

    Returns:
        行番号の集合。パッチが空または解釈できない場合は空集合。
    """
    lines: set[int] = set()
    current: int | None = None
    for raw in patch.splitlines():
        header = _HUNK_HEADER_RE.match(raw)
        if header:
            current = int(header.group(1))
            continue
        if current is None:
            continue
        if raw.startswith("-"):
            continue
        if raw.startswith("\\"):
            # "\ No newline at end of file"
            continue
        lines.add(current)
        current += 1
    return frozenset(lines)
