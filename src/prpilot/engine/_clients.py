"""クライアントファクトリー — LLM モデルとソース管理クライアントの構築。

試行ごとに新しいクライアントを構築し、試行間で再利用しない。
構築失敗は CollaboratorError としてリトライプロトコルに渡す。
"""

from __future__ import annotations

from github import Auth, Github
from pydantic_ai.models import Model
from pydantic_ai.models.bedrock import BedrockConverseModel
from pydantic_ai.providers.bedrock import BedrockProvider

from prpilot.models.errors import CollaboratorError

MODEL_CLIENT = "model-client"
GITHUB_CLIENT = "github-client"


def create_model_client(model_id: str, region: str) -> Model:
    """Amazon Bedrock 上のモデルに接続する pydantic-ai モデルを構築する。

    Args:
        model_id: Bedrock のモデル ID（例: ``"anthropic.claude-3-5-sonnet-20240620-v1:0"``）。
        region: AWS リージョン。

    Returns:
        BedrockConverseModel インスタンス。

    Raises:
        CollaboratorError: プロバイダーまたはモデルの構築に失敗した場合。
    """
    try:
        provider = BedrockProvider(region_name=region)
        return BedrockConverseModel(model_id, provider=provider)
    except Exception as exc:
        raise CollaboratorError(
            MODEL_CLIENT, f"Failed to create Bedrock client in {region}: {exc}"
        ) from exc


def create_github_client(token: str) -> Github:
    """トークン認証の GitHub クライアントを構築する。

    Raises:
        CollaboratorError: クライアントの構築に失敗した場合。
    """
    try:
        return Github(auth=Auth.Token(token))
    except Exception as exc:
        raise CollaboratorError(
            GITHUB_CLIENT, f"Failed to create GitHub client: {exc}"
        ) from exc
