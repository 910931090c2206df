"""生成処理（PR 説明文・インラインレビュー・ユニットテスト）。

オーケストレーターは各関数の呼び出し規約のみに依存する。
"""

from prpilot.collaborators._code_review import (
    ReviewLevel,
    generate_code_review_comment,
)
from prpilot.collaborators._pr_description import generate_pr_description
from prpilot.collaborators._unit_tests import generate_unit_tests_suite

__all__ = [
    "ReviewLevel",
    "generate_code_review_comment",
    "generate_pr_description",
    "generate_unit_tests_suite",
]
