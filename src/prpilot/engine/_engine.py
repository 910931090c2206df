"""run_action — アクション全体の実行エントリ。

リトライ予算を解決し、run_attempt をリトライプロトコルで包んで実行する。
プロセス終了は呼び出し側（CLI）が RunOutcome に基づいて行う。
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping

from prpilot.config import collect_inputs, resolve_retry_budget
from prpilot.engine._dispatch import AttemptDependencies, AttemptResult, run_attempt
from prpilot.engine._retry import RETRY_DELAY_SECONDS, run_with_retry
from prpilot.models.errors import ConfigurationError, ErrorKind
from prpilot.models.outcome import RunFailed, RunOutcome

logger = logging.getLogger(__name__)


async def run_action(
    overrides: Mapping[str, object] | None = None,
    *,
    env: Mapping[str, str] | None = None,
    deps: AttemptDependencies | None = None,
    delay_seconds: float = RETRY_DELAY_SECONDS,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> RunOutcome:
    """アクションを 1 つのリトライ予算で実行する。

    Args:
        overrides: CLI からの入力オーバーライド。None 値は未指定扱い。
        env: 参照する環境変数。None の場合は ``os.environ``。
        deps: 外部協調処理。None の場合は既定の実装。
        delay_seconds: 失敗から次の試行までの待機時間（秒）。
        sleep: 待機関数。

    Returns:
        RunSucceeded または RunFailed。
        retry-count が不正な場合は試行せずに RunFailed(attempts=0)。
    """
    try:
        max_retries = resolve_retry_budget(collect_inputs(env, overrides))
    except ConfigurationError as exc:
        logger.error("Error: %s", exc)
        return RunFailed(kind=ErrorKind.CONFIGURATION, message=str(exc), attempts=0)

    async def _attempt() -> AttemptResult:
        return await run_attempt(overrides, env=env, deps=deps)

    return await run_with_retry(
        _attempt,
        max_retries=max_retries,
        delay_seconds=delay_seconds,
        sleep=sleep,
    )
