"""実行エンジン。

1 試行は以下の順で実行され、失敗時は試行全体がリトライされる:

1. 入力の読み取りと設定構築（load_run_configuration）
2. モデル・GitHub クライアント構築
3. PR コンテキスト判定（PR 以外のイベントは no-op）
4. PR 説明文 → コードレビュー → ユニットテスト（フラグが有効なもののみ）
"""

from prpilot.engine._dispatch import AttemptDependencies, AttemptResult, run_attempt
from prpilot.engine._engine import run_action
from prpilot.engine._retry import RETRY_DELAY_SECONDS, run_with_retry

__all__ = [
    "AttemptDependencies",
    "AttemptResult",
    "RETRY_DELAY_SECONDS",
    "run_action",
    "run_attempt",
    "run_with_retry",
]
