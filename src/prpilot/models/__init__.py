"""prpilot ドメインモデルパッケージ。"""

from prpilot.models._base import PrpilotBaseModel
from prpilot.models.config import (
    DEFAULT_AWS_REGION,
    DEFAULT_MAX_RETRIES,
    FeatureFlags,
    RunConfiguration,
)
from prpilot.models.context import PullRequestContext, RepoCoordinates
from prpilot.models.errors import (
    CollaboratorError,
    ConfigurationError,
    ErrorKind,
    classify_error,
)
from prpilot.models.exit_code import ExitCode
from prpilot.models.outcome import RunFailed, RunOutcome, RunSucceeded

__all__ = [
    "CollaboratorError",
    "ConfigurationError",
    "DEFAULT_AWS_REGION",
    "DEFAULT_MAX_RETRIES",
    "ErrorKind",
    "ExitCode",
    "FeatureFlags",
    "PrpilotBaseModel",
    "PullRequestContext",
    "RepoCoordinates",
    "RunConfiguration",
    "RunFailed",
    "RunOutcome",
    "RunSucceeded",
    "classify_error",
]
