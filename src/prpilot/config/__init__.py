"""設定管理モジュール。"""

from prpilot.config._inputs import collect_inputs, read_input
from prpilot.config._resolver import (
    load_run_configuration,
    parse_flag,
    resolve_retry_budget,
    split_patterns,
)

__all__ = [
    "collect_inputs",
    "load_run_configuration",
    "parse_flag",
    "read_input",
    "resolve_retry_budget",
    "split_patterns",
]
