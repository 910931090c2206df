"""設定リゾルバー。

アクション入力のスナップショットから RunConfiguration を構築する。
真偽値フラグとカンマ区切りリストはここで一度だけ解釈する。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Final

from pydantic import ValidationError

from prpilot.config import _inputs as names
from prpilot.models.config import (
    DEFAULT_AWS_REGION,
    DEFAULT_MAX_RETRIES,
    FeatureFlags,
    RunConfiguration,
)
from prpilot.models.errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES: Final[frozenset[str]] = frozenset({"true"})
_FALSE_VALUES: Final[frozenset[str]] = frozenset({"", "false"})


def parse_flag(name: str, raw: str) -> bool:
    """真偽値入力を解釈する。

    ``"true"`` は大文字小文字を問わず True、空文字列と ``"false"`` は False。
    それ以外の値は False として扱い、警告を出力する。

    Args:
        name: 入力名（警告メッセージ用）。
        raw: 入力値。

    Returns:
        解釈した真偽値。
    """
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value not in _FALSE_VALUES:
        logger.warning(
            "Input '%s' has unrecognized value %r; treating it as false", name, raw
        )
    return False


def split_patterns(raw: str) -> tuple[str, ...]:
    """カンマ区切りのパターン入力を分割する。

    各要素は前後の空白を除去し、空要素は捨てる。
    入力が空の場合は空タプルを返す。
    """
    if not raw:
        return ()
    return tuple(p for p in (part.strip() for part in raw.split(",")) if p)


def resolve_retry_budget(inputs: Mapping[str, str]) -> int:
    """retry-count 入力からリトライ予算を解決する。

    Args:
        inputs: collect_inputs() のスナップショット。

    Returns:
        初回失敗後に許可される追加試行回数。未指定の場合は DEFAULT_MAX_RETRIES。

    Raises:
        ConfigurationError: 値が非負整数でない場合。
    """
    raw = inputs.get(names.RETRY_COUNT, "")
    if not raw:
        return DEFAULT_MAX_RETRIES
    try:
        budget = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"Input '{names.RETRY_COUNT}' must be a non-negative integer, got {raw!r}"
        ) from None
    if budget < 0:
        raise ConfigurationError(
            f"Input '{names.RETRY_COUNT}' must be a non-negative integer, got {raw!r}"
        )
    return budget


def load_run_configuration(inputs: Mapping[str, str]) -> RunConfiguration:
    """入力スナップショットから RunConfiguration を構築する。

    全フィールドを診断ログに出力してからトークンを検証する。
    トークンは設定有無のみを出力し、値は出力しない。

    Args:
        inputs: collect_inputs() のスナップショット。

    Returns:
        検証済みの RunConfiguration。

    Raises:
        ConfigurationError: GitHub トークンが未設定の場合、
            または値がモデルのバリデーションに失敗した場合。
    """
    github_token = inputs.get(names.GITHUB_TOKEN, "")
    aws_region = inputs.get(names.AWS_REGION, "")
    model_id = inputs.get(names.MODEL_ID, "")
    exclude_files = inputs.get(names.CODE_REVIEW_EXCLUDE_FILES, "")
    review_level = inputs.get(names.CODE_REVIEW_LEVEL, "")
    output_language = inputs.get(names.OUTPUT_LANGUAGE, "")
    unit_test_source_folder = inputs.get(names.UNIT_TEST_SOURCE_FOLDER, "")
    unit_test_exclude_files = inputs.get(names.UNIT_TEST_EXCLUDE_FILES, "")

    flags = FeatureFlags(
        generate_code_review=parse_flag(
            names.GENERATE_CODE_REVIEW, inputs.get(names.GENERATE_CODE_REVIEW, "")
        ),
        generate_pr_description=parse_flag(
            names.GENERATE_PR_DESCRIPTION,
            inputs.get(names.GENERATE_PR_DESCRIPTION, ""),
        ),
        generate_unit_test=parse_flag(
            names.GENERATE_UNIT_TEST, inputs.get(names.GENERATE_UNIT_TEST, "")
        ),
    )

    logger.info(
        "GitHub Token: %s", "Token is set" if github_token else "Token is not set"
    )
    logger.info("AWS Region: %s", aws_region or DEFAULT_AWS_REGION)
    logger.info("Model ID: %s", model_id)
    logger.info("Excluded files: %s", exclude_files)
    logger.info("Code review: %s", str(flags.generate_code_review).lower())
    logger.info("Output language: %s", output_language)
    logger.info("Review level: %s", review_level)
    logger.info(
        "Generate PR description: %s", str(flags.generate_pr_description).lower()
    )
    logger.info("Generate unit test suite: %s", str(flags.generate_unit_test).lower())
    logger.info("Generate unit test source folder: %s", unit_test_source_folder)
    logger.info("Generate unit test exclude files: %s", unit_test_exclude_files)

    if not github_token:
        raise ConfigurationError("GitHub token is not set")

    try:
        return RunConfiguration(
            github_token=github_token,
            aws_region=aws_region or DEFAULT_AWS_REGION,
            model_id=model_id,
            exclude_patterns=split_patterns(exclude_files),
            review_level=review_level,
            flags=flags,
            output_language=output_language,
            unit_test_source_folder=unit_test_source_folder,
            unit_test_exclude_patterns=split_patterns(unit_test_exclude_files),
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
