"""ExitCode — 終了コードの定義。"""

from enum import IntEnum


class ExitCode(IntEnum):
    """プロセス終了コード。

    成功（PR 以外のイベントによる no-op を含む）は 0、
    リトライ予算の枯渇または未知のエラーによる終了は 1。
    """

    SUCCESS = 0
    FAILURE = 1
