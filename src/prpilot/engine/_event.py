"""トリガーイベントからのプルリクエストコンテキスト取得。

GitHub Actions はイベントペイロードを ``GITHUB_EVENT_PATH`` の JSON ファイルに、
リポジトリ名を ``GITHUB_REPOSITORY`` に格納する。
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from prpilot.models.context import PullRequestContext, RepoCoordinates
from prpilot.models.errors import ConfigurationError

logger = logging.getLogger(__name__)

_EVENT_PATH_ENV = "GITHUB_EVENT_PATH"
_REPOSITORY_ENV = "GITHUB_REPOSITORY"


def load_event_payload(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """イベントペイロードを読み込む。

    ``GITHUB_EVENT_PATH`` が未設定、またはファイルが存在しない場合は空辞書を返す。

    Raises:
        ConfigurationError: ペイロードが JSON として解釈できない場合、
            または読み取れない場合。
    """
    source = os.environ if env is None else env
    raw_path = source.get(_EVENT_PATH_ENV, "")
    if not raw_path:
        return {}
    path = Path(raw_path)
    if not path.is_file():
        logger.warning("%s %s does not exist", _EVENT_PATH_ENV, path)
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(
            f"Failed to read event payload from {path}: {exc}"
        ) from exc
    if not isinstance(payload, dict):
        raise ConfigurationError(
            f"Event payload in {path} must be a JSON object, "
            f"got {type(payload).__name__}"
        )
    return payload


def resolve_repo_coordinates(
    payload: Mapping[str, Any],
    env: Mapping[str, str] | None = None,
) -> RepoCoordinates:
    """リポジトリ座標を解決する。

    ``GITHUB_REPOSITORY``（``owner/repo``）を優先し、
    未設定の場合はペイロードの ``repository`` から取得する。

    Raises:
        ConfigurationError: どちらからも解決できない場合。
    """
    source = os.environ if env is None else env
    full_name = source.get(_REPOSITORY_ENV, "")
    if full_name:
        owner, sep, repo = full_name.partition("/")
        if sep and owner and repo:
            return RepoCoordinates(owner=owner, repo=repo)
        raise ConfigurationError(
            f"{_REPOSITORY_ENV} must be in 'owner/repo' form, got {full_name!r}"
        )

    repository = payload.get("repository")
    if isinstance(repository, dict):
        owner_info = repository.get("owner")
        owner = owner_info.get("login") if isinstance(owner_info, dict) else None
        name = repository.get("name")
        if owner and name:
            return RepoCoordinates(owner=owner, repo=name)

    raise ConfigurationError(
        f"Repository is unknown: set {_REPOSITORY_ENV} or run on a repository event"
    )


def load_pull_request_context(
    env: Mapping[str, str] | None = None,
) -> PullRequestContext | None:
    """トリガーイベントから PullRequestContext を構築する。

    Args:
        env: 参照する環境変数。None の場合は ``os.environ``。

    Returns:
        PR イベントの場合は PullRequestContext。
        ペイロードに ``pull_request`` がない場合は None（エラーではない）。

    Raises:
        ConfigurationError: ペイロードの読み込み、または
            リポジトリ座標・PR 情報の解釈に失敗した場合。
    """
    payload = load_event_payload(env)
    pull_request = payload.get("pull_request")
    if not pull_request:
        return None
    if not isinstance(pull_request, dict):
        raise ConfigurationError(
            f"pull_request payload must be a JSON object, "
            f"got {type(pull_request).__name__}"
        )

    repo = resolve_repo_coordinates(payload, env)
    head = pull_request.get("head") or {}
    base = pull_request.get("base") or {}
    try:
        return PullRequestContext(
            number=pull_request.get("number"),
            repo=repo,
            title=pull_request.get("title") or "",
            body=pull_request.get("body") or "",
            head_ref=head.get("ref") or "",
            head_sha=head.get("sha") or "",
            base_ref=base.get("ref") or "",
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid pull_request payload: {exc}") from exc
