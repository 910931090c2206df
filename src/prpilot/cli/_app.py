"""CliApp — Typer アプリケーション定義。

アクション入力を CLI オプションで上書きして run_action を実行し、
RunOutcome を終了コードと失敗アノテーションに変換する。
"""

from __future__ import annotations

import asyncio
import importlib.metadata
import logging
import sys
from typing import Annotated

import typer

from prpilot.config import _inputs as names
from prpilot.engine import run_action
from prpilot.engine._annotations import emit_error
from prpilot.models.exit_code import ExitCode
from prpilot.models.outcome import RunFailed

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_NOISY_LOGGERS = ("botocore", "urllib3", "httpx", "github")

app = typer.Typer(
    name="prpilot",
    help=(
        "Pull request assistant for GitHub Actions.\n\n"
        "Drafts PR descriptions, posts inline review comments and generates "
        "unit tests with a model hosted on Amazon Bedrock. Options override the "
        "corresponding action inputs (INPUT_* environment variables)."
    ),
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    """--version 指定時にバージョン番号を出力して終了する。"""
    if value:
        print(importlib.metadata.version("prpilot"))
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """ルートロガーを stderr に設定する。"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=_LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def main() -> None:
    """CLI エントリポイント。pyproject.toml の [project.scripts] から呼び出される。"""
    app()


@app.command()
def run(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
    github_token: Annotated[
        str | None, typer.Option("--github-token", help="GitHub token.")
    ] = None,
    aws_region: Annotated[
        str | None, typer.Option("--aws-region", help="AWS region of Bedrock.")
    ] = None,
    model_id: Annotated[
        str | None, typer.Option("--model-id", help="Bedrock model ID.")
    ] = None,
    generate_pr_description: Annotated[
        bool | None,
        typer.Option(
            "--generate-pr-description/--no-generate-pr-description",
            help="Enable/disable PR description generation.",
        ),
    ] = None,
    generate_code_review: Annotated[
        bool | None,
        typer.Option(
            "--generate-code-review/--no-generate-code-review",
            help="Enable/disable inline code review.",
        ),
    ] = None,
    code_review_exclude_files: Annotated[
        str | None,
        typer.Option(
            "--generate-code-review-exclude-files",
            help="Comma-separated glob patterns excluded from review.",
        ),
    ] = None,
    code_review_level: Annotated[
        str | None,
        typer.Option(
            "--generate-code-review-level", help="Review level: concise or detailed."
        ),
    ] = None,
    generate_unit_test: Annotated[
        bool | None,
        typer.Option(
            "--generate-unit-test/--no-generate-unit-test",
            help="Enable/disable unit test generation.",
        ),
    ] = None,
    unit_test_source_folder: Annotated[
        str | None,
        typer.Option(
            "--generate-unit-test-source-folder",
            help="Source folder to generate unit tests for.",
        ),
    ] = None,
    unit_test_exclude_files: Annotated[
        str | None,
        typer.Option(
            "--generate-unit-test-exclude-files",
            help="Comma-separated glob patterns excluded from test generation.",
        ),
    ] = None,
    output_language: Annotated[
        str | None,
        typer.Option("--output-language", help="Language of generated text."),
    ] = None,
    retry_count: Annotated[
        int | None,
        typer.Option(
            "--retry-count",
            help="Retries after the first failed attempt (non-negative integer).",
            min=0,
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
) -> None:
    """Run the pull request assistant once, retrying failed attempts."""
    _configure_logging(verbose)

    overrides: dict[str, object] = {
        names.GITHUB_TOKEN: github_token,
        names.AWS_REGION: aws_region,
        names.MODEL_ID: model_id,
        names.GENERATE_PR_DESCRIPTION: generate_pr_description,
        names.GENERATE_CODE_REVIEW: generate_code_review,
        names.CODE_REVIEW_EXCLUDE_FILES: code_review_exclude_files,
        names.CODE_REVIEW_LEVEL: code_review_level,
        names.GENERATE_UNIT_TEST: generate_unit_test,
        names.UNIT_TEST_SOURCE_FOLDER: unit_test_source_folder,
        names.UNIT_TEST_EXCLUDE_FILES: unit_test_exclude_files,
        names.OUTPUT_LANGUAGE: output_language,
        names.RETRY_COUNT: retry_count,
    }

    outcome = asyncio.run(run_action(overrides))

    if isinstance(outcome, RunFailed):
        emit_error(outcome.message)
        raise typer.Exit(code=ExitCode.FAILURE)
