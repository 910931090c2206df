"""アクション入力の読み取り。

GitHub Actions は ``with:`` に指定された入力を ``INPUT_<NAME>`` 環境変数として
渡す。NAME は入力名の空白を ``_`` に置換して大文字化したもの（ハイフンは保持）。
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

GITHUB_TOKEN: Final[str] = "github-token"
AWS_REGION: Final[str] = "aws-region"
MODEL_ID: Final[str] = "model-id"
GENERATE_CODE_REVIEW: Final[str] = "generate-code-review"
CODE_REVIEW_EXCLUDE_FILES: Final[str] = "generate-code-review-exclude-files"
CODE_REVIEW_LEVEL: Final[str] = "generate-code-review-level"
GENERATE_PR_DESCRIPTION: Final[str] = "generate-pr-description"
GENERATE_UNIT_TEST: Final[str] = "generate-unit-test"
UNIT_TEST_SOURCE_FOLDER: Final[str] = "generate-unit-test-source-folder"
UNIT_TEST_EXCLUDE_FILES: Final[str] = "generate-unit-test-exclude-files"
OUTPUT_LANGUAGE: Final[str] = "output-language"
RETRY_COUNT: Final[str] = "retry-count"

INPUT_NAMES: Final[tuple[str, ...]] = (
    GITHUB_TOKEN,
    AWS_REGION,
    MODEL_ID,
    GENERATE_CODE_REVIEW,
    CODE_REVIEW_EXCLUDE_FILES,
    CODE_REVIEW_LEVEL,
    GENERATE_PR_DESCRIPTION,
    GENERATE_UNIT_TEST,
    UNIT_TEST_SOURCE_FOLDER,
    UNIT_TEST_EXCLUDE_FILES,
    OUTPUT_LANGUAGE,
    RETRY_COUNT,
)
"""読み取り対象のアクション入力名。"""


def input_env_key(name: str) -> str:
    """入力名に対応する環境変数名を返す。"""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def read_input(name: str, env: Mapping[str, str] | None = None) -> str:
    """アクション入力を読み取る。

    Args:
        name: 入力名（例: ``"github-token"``）。
        env: 参照する環境変数。None の場合は ``os.environ``。

    Returns:
        前後の空白を除去した値。未設定の場合は空文字列。
    """
    source = os.environ if env is None else env
    return source.get(input_env_key(name), "").strip()


def filter_cli_overrides(cli_options: Mapping[str, object]) -> dict[str, str]:
    """CLI オプション辞書から None 値を除外し、入力と同じ文字列表現に揃える。

    None は「未指定」を意味し、アクション入力の値が使われる。
    bool は ``"true"`` / ``"false"`` に、その他は ``str()`` に変換する。

    Args:
        cli_options: 入力名をキーとする CLI オプションの辞書。

    Returns:
        None 値を除外した文字列辞書。
    """
    result: dict[str, str] = {}
    for key, value in cli_options.items():
        if value is None:
            continue
        if isinstance(value, bool):
            result[key] = "true" if value else "false"
        else:
            result[key] = str(value).strip()
    return result


def collect_inputs(
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, object] | None = None,
) -> dict[str, str]:
    """全アクション入力のスナップショットを作成する。

    試行のたびに呼び出され、同じ外部入力を読み直す。
    CLI オーバーライドはアクション入力より優先される。

    Args:
        env: 参照する環境変数。None の場合は ``os.environ``。
        overrides: CLI オプションの辞書。None 値は未指定扱い。

    Returns:
        入力名 → 値の辞書。全ての INPUT_NAMES をキーに持つ。
    """
    inputs = {name: read_input(name, env) for name in INPUT_NAMES}
    if overrides is not None:
        inputs.update(filter_cli_overrides(overrides))
    return inputs
