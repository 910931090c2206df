"""アクション入力の読み取りのテスト。"""

from __future__ import annotations

from unittest.mock import patch

from prpilot.config._inputs import (
    GITHUB_TOKEN,
    INPUT_NAMES,
    RETRY_COUNT,
    collect_inputs,
    filter_cli_overrides,
    input_env_key,
    read_input,
)


# ---------------------------------------------------------------------------
# input_env_key / read_input
# ---------------------------------------------------------------------------


class TestInputEnvKey:
    """入力名から環境変数名への変換。"""

    def test_hyphen_kept_and_uppercased(self) -> None:
        """ハイフンは保持され、大文字化されること。"""
        assert input_env_key("github-token") == "INPUT_GITHUB-TOKEN"

    def test_space_replaced(self) -> None:
        """空白は _ に置換されること。"""
        assert input_env_key("my input") == "INPUT_MY_INPUT"


class TestReadInput:
    """read_input のテスト。"""

    def test_reads_value(self) -> None:
        env = {"INPUT_MODEL-ID": "anthropic.claude-v2"}
        assert read_input("model-id", env) == "anthropic.claude-v2"

    def test_value_is_trimmed(self) -> None:
        env = {"INPUT_AWS-REGION": "  eu-west-1\n"}
        assert read_input("aws-region", env) == "eu-west-1"

    def test_missing_is_empty(self) -> None:
        assert read_input("aws-region", {}) == ""

    def test_defaults_to_os_environ(self) -> None:
        """env 未指定時は os.environ を参照すること。"""
        with patch.dict("os.environ", {"INPUT_OUTPUT-LANGUAGE": "Japanese"}):
            assert read_input("output-language") == "Japanese"


# ---------------------------------------------------------------------------
# filter_cli_overrides
# ---------------------------------------------------------------------------


class TestFilterCliOverrides:
    """filter_cli_overrides のテスト。"""

    def test_none_removed(self) -> None:
        assert filter_cli_overrides({"model-id": None}) == {}

    def test_bool_converted(self) -> None:
        result = filter_cli_overrides(
            {"generate-unit-test": True, "generate-code-review": False}
        )
        assert result == {"generate-unit-test": "true", "generate-code-review": "false"}

    def test_int_converted(self) -> None:
        assert filter_cli_overrides({"retry-count": 0}) == {"retry-count": "0"}

    def test_empty_string_kept(self) -> None:
        """空文字列は明示的な指定として保持されること。"""
        assert filter_cli_overrides({"model-id": ""}) == {"model-id": ""}


# ---------------------------------------------------------------------------
# collect_inputs
# ---------------------------------------------------------------------------


class TestCollectInputs:
    """collect_inputs のテスト。"""

    def test_contains_all_input_names(self) -> None:
        inputs = collect_inputs({})
        assert set(inputs) == set(INPUT_NAMES)
        assert all(v == "" for v in inputs.values())

    def test_override_wins_over_env(self) -> None:
        """CLI オーバーライドがアクション入力より優先されること。"""
        env = {"INPUT_GITHUB-TOKEN": "from-env"}
        inputs = collect_inputs(env, {GITHUB_TOKEN: "from-cli"})
        assert inputs[GITHUB_TOKEN] == "from-cli"

    def test_none_override_keeps_env(self) -> None:
        env = {"INPUT_GITHUB-TOKEN": "from-env"}
        inputs = collect_inputs(env, {GITHUB_TOKEN: None})
        assert inputs[GITHUB_TOKEN] == "from-env"

    def test_rereads_environment_each_call(self) -> None:
        """呼び出しごとに入力を読み直すこと。"""
        with patch.dict("os.environ", {"INPUT_RETRY-COUNT": "1"}):
            first = collect_inputs()
        with patch.dict("os.environ", {"INPUT_RETRY-COUNT": "2"}):
            second = collect_inputs()
        assert first[RETRY_COUNT] == "1"
        assert second[RETRY_COUNT] == "2"
