"""
Maps resolved inputs onto the anvil-zksync command line.
"""

import shlex
from typing import Literal, NamedTuple

from anvil_action.config.constants import Mode
from anvil_action.config.inputs import ActionInputs

VERBOSITY = "verbosity"


class FlagSpec(NamedTuple):
    attr: str
    flag: str
    kind: Literal["value", "switch"]


# Global flags, in command line order. The verbosity marker sits where the
# node expects its `-v...` token.
# fmt: off
GLOBAL_FLAGS: tuple[FlagSpec | str, ...] = (
    FlagSpec("offline", "--offline", "switch"),
    FlagSpec("health_check_endpoint", "--health-check-endpoint", "switch"),
    FlagSpec("config_out", "--config-out", "value"),
    FlagSpec("protocol_version", "--protocol-version", "value"),

    FlagSpec("port", "--port", "value"),
    FlagSpec("host", "--host", "value"),
    FlagSpec("chain_id", "--chain-id", "value"),
    FlagSpec("block_time", "--block-time", "value"),

    FlagSpec("show_storage_logs", "--show-storage-logs", "value"),
    FlagSpec("show_vm_details", "--show-vm-details", "value"),
    FlagSpec("show_gas_details", "--show-gas-details", "value"),

    # Gas pricing
    FlagSpec("l1_gas_price", "--l1-gas-price", "value"),
    FlagSpec("l2_gas_price", "--l2-gas-price", "value"),
    FlagSpec("l1_pubdata_price", "--l1-pubdata-price", "value"),
    FlagSpec("price_scale_factor", "--price-scale-factor", "value"),
    FlagSpec("limit_scale_factor", "--limit-scale-factor", "value"),

    FlagSpec("override_bytecodes_dir", "--override-bytecodes-dir", "value"),
    FlagSpec("dev_system_contracts", "--dev-system-contracts", "value"),
    FlagSpec("evm_interpreter", "--evm-interpreter", "switch"),

    FlagSpec("log", "--log", "value"),
    FlagSpec("log_file_path", "--log-file-path", "value"),

    FlagSpec("cache", "--cache", "value"),
    FlagSpec("reset_cache", "--reset-cache", "switch"),
    FlagSpec("cache_dir", "--cache-dir", "value"),

    # Accounts
    FlagSpec("accounts", "--accounts", "value"),
    FlagSpec("balance", "--balance", "value"),
    FlagSpec("mnemonic", "--mnemonic", "value"),
    FlagSpec("mnemonic_random", "--mnemonic-random", "value"),
    FlagSpec("mnemonic_seed_unsafe", "--mnemonic-seed-unsafe", "value"),
    FlagSpec("derivation_path", "--derivation-path", "value"),
    FlagSpec("auto_impersonate", "--auto-impersonate", "switch"),

    FlagSpec("enforce_bytecode_compression", "--enforce-bytecode-compression", "switch"),
    FlagSpec("system_contracts_path", "--system-contracts-path", "value"),

    FlagSpec("show_node_config", "--show-node-config", "switch"),
    VERBOSITY,

    # State
    FlagSpec("timestamp", "--timestamp", "value"),
    FlagSpec("init_file", "--init", "value"),
    FlagSpec("state", "--state", "value"),
    FlagSpec("state_interval", "--state-interval", "value"),
    FlagSpec("dump_state", "--dump-state", "value"),
    FlagSpec("preserve_historical_states", "--preserve-historical-states", "switch"),
    FlagSpec("load_state", "--load-state", "value"),

    # Mining / server
    FlagSpec("no_mining", "--no-mining", "switch"),
    FlagSpec("allow_origin", "--allow-origin", "value"),
    FlagSpec("no_cors", "--no-cors", "switch"),
    FlagSpec("order", "--order", "value"),

    # L1
    FlagSpec("spawn_l1", "--spawn-l1", "value"),
    FlagSpec("external_l1", "--external-l1", "value"),
    FlagSpec("auto_execute_l1", "--auto-execute-l1", "switch"),

    # Custom base token
    FlagSpec("base_token_symbol", "--base-token-symbol", "value"),
    FlagSpec("base_token_ratio", "--base-token-ratio", "value"),
)

FORK_FLAGS: tuple[FlagSpec, ...] = (
    FlagSpec("fork_url", "--fork-url", "value"),
    FlagSpec("fork_block_number", "--fork-block-number", "value"),
    FlagSpec("fork_transaction_hash", "--fork-transaction-hash", "value"),
)
# fmt: on


def verbosity_flag(level: int) -> str | None:
    """One token of ``level + 1`` flag characters; nothing for level 0."""
    if level <= 0:
        return None
    return "-" * (level + 1)


def _emit(inputs: ActionInputs, specs, args: list[str]) -> None:
    for spec in specs:
        value = getattr(inputs, spec.attr)
        if spec.kind == "switch":
            if value is True:
                args.append(spec.flag)
        elif value:
            args.extend([spec.flag, str(value)])


def build_args(inputs: ActionInputs) -> list[str]:
    """
    Build the node's argument list from validated inputs.

    Global flags come first, then the raw ``extra-args`` tokens, then the
    mode subcommand with its own flags. The same inputs always produce the
    same list.
    """
    args: list[str] = []

    for spec in GLOBAL_FLAGS:
        if spec == VERBOSITY:
            flag = verbosity_flag(int(inputs.verbosity))
            if flag:
                args.append(flag)
        else:
            _emit(inputs, (spec,), args)

    # Passed through untouched for options not modelled here
    if inputs.extra_args and inputs.extra_args.strip():
        args.extend(inputs.extra_args.split())

    if inputs.mode == Mode.Fork:
        args.append(Mode.Fork.value)
        _emit(inputs, FORK_FLAGS, args)
    else:
        args.append(Mode.Run.value)

    return args


def format_command(executable: str, args: list[str]) -> str:
    """Shell-quoted rendering of a command for logs."""
    return shlex.join([executable, *args])
