"""prpilot: GitHub Actions 向けプルリクエストアシスタント。

PR 説明文の生成、インラインレビュー、ユニットテスト生成を
Amazon Bedrock 上のモデルで実行する。
"""


def main() -> None:
    """``prpilot.main()`` としてプログラムから CLI を起動する。

    CLI 層（typer・Bedrock クライアント）の import は呼び出し時まで遅延させ、
    ``prpilot.models`` などのサブパッケージを軽量に import できるようにする。
    """
    from prpilot.cli import main as cli_main

    cli_main()
