"""リトライプロトコル — 試行全体を固定間隔で再実行する有界ループ。

認識済みエラー（ConfigurationError / CollaboratorError）は予算の範囲で
試行全体を最初からやり直す。未知のエラーは予算に関係なく即時終端失敗とする。
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Final

from prpilot.engine._annotations import emit_error, emit_warning
from prpilot.engine._dispatch import AttemptResult
from prpilot.models.config import DEFAULT_MAX_RETRIES
from prpilot.models.errors import ErrorKind, classify_error
from prpilot.models.outcome import RunFailed, RunOutcome, RunSucceeded

logger = logging.getLogger(__name__)

RETRY_DELAY_SECONDS: Final[float] = 5.0
"""失敗から次の試行までの待機時間（秒）。"""


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


async def run_with_retry(
    attempt: Callable[[], Awaitable[AttemptResult]],
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    delay_seconds: float = RETRY_DELAY_SECONDS,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> RunOutcome:
    """試行をリトライ付きで実行し、RunOutcome を返す。

    予算 n の場合、試行は最大 n+1 回、待機は最大 n 回。
    Exception 以外の BaseException（キャンセル・割り込み）は捕捉しない。

    Args:
        attempt: 1 試行を実行するコルーチン関数。呼び出しごとに設定を読み直す。
        max_retries: 初回失敗後に許可される追加試行回数。
        delay_seconds: 失敗から次の試行までの待機時間（秒）。
        sleep: 待機関数。

    Returns:
        RunSucceeded または RunFailed。この関数は Exception を送出しない。
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be non-negative, got {max_retries}")

    remaining = max_retries
    attempts = 0
    while True:
        attempts += 1
        try:
            result = await attempt()
        except Exception as exc:
            kind = classify_error(exc)
            if kind is ErrorKind.UNKNOWN:
                logger.error(
                    "Unknown error (%s) on attempt %d: %s",
                    type(exc).__name__,
                    attempts,
                    exc,
                    exc_info=True,
                )
                detail = (
                    f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
                )
                return RunFailed(
                    kind=kind,
                    message=f"An unknown error occurred: {detail}",
                    attempts=attempts,
                )

            message = _describe(exc)
            logger.error("Error: %s", message, exc_info=True)
            emit_error(f"Error: {message}")

            if remaining <= 0:
                return RunFailed(
                    kind=kind,
                    message=f"Action failed after multiple retries: {message}",
                    attempts=attempts,
                )

            logger.warning(
                "Retrying in %gs... Attempts remaining: %d", delay_seconds, remaining
            )
            emit_warning(f"Retrying... Attempts remaining: {remaining}")
            await sleep(delay_seconds)
            remaining -= 1
            continue

        return RunSucceeded(
            attempts=attempts, skipped=result is AttemptResult.SKIPPED
        )
