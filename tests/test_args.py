"""Tests for command line construction."""

import pytest

from anvil_action.args import build_args, format_command, verbosity_flag
from anvil_action.config import ActionInputs, MappingConfigSource, resolve_inputs


def _index_of_sublist(haystack: list[str], needle: list[str]) -> int:
    for i in range(len(haystack) - len(needle) + 1):
        if haystack[i : i + len(needle)] == needle:
            return i
    return -1


class TestBuildArgs:
    """Tests for build_args."""

    def test_defaults_run_mode(self):
        """Test default inputs produce port/host flags and a trailing run."""
        args = build_args(ActionInputs())

        assert args == ["--port", "8011", "--host", "127.0.0.1", "run"]

    def test_fork_scenario(self):
        """Test fork mode trails global flags with its own flags."""
        inputs = resolve_inputs(
            MappingConfigSource(
                {
                    "mode": "fork",
                    "forkUrl": "https://example",
                    "port": "8011",
                    "host": "127.0.0.1",
                }
            )
        )
        args = build_args(inputs)

        assert args[-3:] == ["fork", "--fork-url", "https://example"]
        assert "run" not in args
        net = _index_of_sublist(args, ["--port", "8011", "--host", "127.0.0.1"])
        assert 0 <= net < args.index("fork")

    def test_fork_optional_flags(self):
        """Test block number and tx hash follow the fork url."""
        args = build_args(
            ActionInputs(
                mode="fork",
                fork_url="https://example",
                fork_block_number="100",
                fork_transaction_hash="0xabc",
            )
        )

        assert args[args.index("fork") :] == [
            "fork",
            "--fork-url", "https://example",
            "--fork-block-number", "100",
            "--fork-transaction-hash", "0xabc",
        ]

    def test_fork_flags_ignored_in_run_mode(self):
        """Test fork settings never leak into a run command."""
        args = build_args(ActionInputs(mode="run", fork_url="https://example"))

        assert "--fork-url" not in args
        assert args[-1] == "run"

    def test_switches_present_only_when_true(self):
        """Test boolean inputs map to bare flags."""
        args = build_args(ActionInputs(offline=True, no_cors=True, reset_cache=False))

        assert "--offline" in args
        assert "--no-cors" in args
        assert "--reset-cache" not in args
        assert args.index("--offline") < args.index("--no-cors")

    def test_value_flags(self):
        """Test string inputs map to flag/value pairs with kebab-case names."""
        args = build_args(ActionInputs(l1_gas_price="100", init_file="genesis.json", spawn_l1="8012"))

        assert _index_of_sublist(args, ["--l1-gas-price", "100"]) >= 0
        assert _index_of_sublist(args, ["--init", "genesis.json"]) >= 0
        assert _index_of_sublist(args, ["--spawn-l1", "8012"]) >= 0

    def test_extra_args_after_flags_before_mode(self):
        """Test raw extra args are split on whitespace and placed before the mode."""
        args = build_args(ActionInputs(extra_args="  --foo bar\t--baz  ", base_token_ratio="2"))

        assert args[-4:] == ["--foo", "bar", "--baz", "run"]
        assert args.index("--base-token-ratio") < args.index("--foo")

    def test_deterministic(self):
        """Test equal inputs give identical lists."""
        source = MappingConfigSource(
            {"mode": "fork", "forkUrl": "https://x", "verbosity": "2", "offline": "true"}
        )
        assert build_args(resolve_inputs(source)) == build_args(resolve_inputs(source))

    def test_verbosity_placement(self):
        """Test the verbosity token follows show-node-config."""
        args = build_args(ActionInputs(show_node_config=True, verbosity="1", timestamp="5"))

        assert args.index("--show-node-config") + 1 == args.index("--")
        assert args.index("--") < args.index("--timestamp")


class TestVerbosity:
    """Tests for the verbosity token."""

    def test_zero_emits_nothing(self):
        assert verbosity_flag(0) is None
        assert not any(set(a) == {"-"} for a in build_args(ActionInputs(verbosity="0")))

    @pytest.mark.parametrize("level, flag", [(1, "--"), (2, "---"), (4, "-----")])
    def test_level_plus_one(self, level, flag):
        assert verbosity_flag(level) == flag
        assert flag in build_args(ActionInputs(verbosity=str(level)))

    def test_level_two_has_three_flag_characters(self):
        args = build_args(ActionInputs(verbosity="2"))
        tokens = [a for a in args if set(a) == {"-"}]

        assert len(tokens) == 1
        tok = tokens[0]
        assert len(tok) == 3 and len(set(tok)) == 1


def test_format_command_quotes():
    assert format_command("/opt/anvil-zksync", ["--mnemonic", "a b c", "run"]) == (
        "/opt/anvil-zksync --mnemonic 'a b c' run"
    )
