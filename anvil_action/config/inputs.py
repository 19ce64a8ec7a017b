"""
Action inputs: where raw values come from and the record they resolve into.
"""

import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Protocol

import toml

from anvil_action.config.constants import DEFAULTS


class ConfigSource(Protocol):
    """Key-value lookup of named inputs. Unset inputs read as ``""``."""

    def get_input(self, name: str) -> str: ...


class EnvConfigSource:
    """
    Reads inputs the way the Actions runner exposes them: ``INPUT_<NAME>``.

    The name is upper-cased and spaces become underscores; hyphens are kept,
    so ``extra-args`` is read from ``INPUT_EXTRA-ARGS``.
    """

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    def get_input(self, name: str) -> str:
        key = f"INPUT_{name.replace(' ', '_').upper()}"
        return self._environ.get(key, "").strip()


class MappingConfigSource:
    """Inputs from a plain mapping (CLI overrides, tests)."""

    def __init__(self, values: Mapping[str, str]):
        self._values = dict(values)

    def get_input(self, name: str) -> str:
        return str(self._values.get(name, "")).strip()


class ChainedConfigSource:
    """Asks each source in order; the first non-empty value wins."""

    def __init__(self, *sources: ConfigSource):
        self._sources = sources

    def get_input(self, name: str) -> str:
        for source in self._sources:
            value = source.get_input(name)
            if value:
                return value
        return ""


@dataclass(frozen=True)
class ActionInputs:
    """
    Resolved configuration record.

    Optional strings are ``None`` when the input was not given, which keeps
    "absent" apart from ``False`` and from an explicit value. ``port`` and
    ``verbosity`` stay raw strings until validation.
    """

    release_tag: str = field(default=DEFAULTS["releaseTag"])
    target: str = field(default=DEFAULTS["target"])
    mode: str = field(default=DEFAULTS["mode"])
    fork_url: str | None = field(default=None)
    fork_block_number: str | None = field(default=None)
    fork_transaction_hash: str | None = field(default=None)
    port: str = field(default=DEFAULTS["port"])
    host: str = field(default=DEFAULTS["host"])
    chain_id: str | None = field(default=None)
    show_storage_logs: str | None = field(default=None)
    show_vm_details: str | None = field(default=None)
    show_gas_details: str | None = field(default=None)
    log: str | None = field(default=None)
    log_file_path: str | None = field(default=None)
    offline: bool = field(default=False)
    health_check_endpoint: bool = field(default=False)
    config_out: str | None = field(default=None)
    l1_gas_price: str | None = field(default=None)
    l2_gas_price: str | None = field(default=None)
    l1_pubdata_price: str | None = field(default=None)
    price_scale_factor: str | None = field(default=None)
    limit_scale_factor: str | None = field(default=None)
    override_bytecodes_dir: str | None = field(default=None)
    dev_system_contracts: str | None = field(default=None)
    evm_interpreter: bool = field(default=False)
    cache: str | None = field(default=None)
    reset_cache: bool = field(default=False)
    cache_dir: str | None = field(default=None)
    accounts: str | None = field(default=None)
    balance: str | None = field(default=None)
    mnemonic: str | None = field(default=None)
    mnemonic_random: str | None = field(default=None)
    mnemonic_seed_unsafe: str | None = field(default=None)
    derivation_path: str | None = field(default=None)
    auto_impersonate: bool = field(default=False)
    block_time: str | None = field(default=None)
    protocol_version: str | None = field(default=None)
    enforce_bytecode_compression: bool = field(default=False)
    system_contracts_path: str | None = field(default=None)
    show_node_config: bool = field(default=False)
    verbosity: str = field(default=DEFAULTS["verbosity"])
    timestamp: str | None = field(default=None)
    init_file: str | None = field(default=None)
    state: str | None = field(default=None)
    state_interval: str | None = field(default=None)
    dump_state: str | None = field(default=None)
    preserve_historical_states: bool = field(default=False)
    load_state: str | None = field(default=None)
    no_mining: bool = field(default=False)
    allow_origin: str | None = field(default=None)
    no_cors: bool = field(default=False)
    order: str | None = field(default=None)
    spawn_l1: str | None = field(default=None)
    external_l1: str | None = field(default=None)
    auto_execute_l1: bool = field(default=False)
    base_token_symbol: str | None = field(default=None)
    base_token_ratio: str | None = field(default=None)
    extra_args: str | None = field(default=None)
    health_check_retries: str = field(default=DEFAULTS["healthCheckRetries"])
    health_check_warmup: str = field(default=DEFAULTS["healthCheckWarmup"])
    health_check_interval: str = field(default=DEFAULTS["healthCheckInterval"])

    def as_toml_string(self) -> str:
        d = asdict(self)
        # Absent inputs are left out of the dump
        d = {k: v for k, v in d.items() if v is not None}
        return toml.dumps(d)


# Input name -> record field. Names match the action's declared inputs.
INPUT_FIELDS: dict[str, str] = {
    "releaseTag": "release_tag",
    "target": "target",
    "mode": "mode",
    "forkUrl": "fork_url",
    "forkBlockNumber": "fork_block_number",
    "forkTransactionHash": "fork_transaction_hash",
    "port": "port",
    "host": "host",
    "chainId": "chain_id",
    "showStorageLogs": "show_storage_logs",
    "showVmDetails": "show_vm_details",
    "showGasDetails": "show_gas_details",
    "log": "log",
    "logFilePath": "log_file_path",
    "offline": "offline",
    "healthCheckEndpoint": "health_check_endpoint",
    "configOut": "config_out",
    "l1GasPrice": "l1_gas_price",
    "l2GasPrice": "l2_gas_price",
    "l1PubdataPrice": "l1_pubdata_price",
    "priceScaleFactor": "price_scale_factor",
    "limitScaleFactor": "limit_scale_factor",
    "overrideBytecodesDir": "override_bytecodes_dir",
    "devSystemContracts": "dev_system_contracts",
    "evmInterpreter": "evm_interpreter",
    "cache": "cache",
    "resetCache": "reset_cache",
    "cacheDir": "cache_dir",
    "accounts": "accounts",
    "balance": "balance",
    "mnemonic": "mnemonic",
    "mnemonicRandom": "mnemonic_random",
    "mnemonicSeedUnsafe": "mnemonic_seed_unsafe",
    "derivationPath": "derivation_path",
    "autoImpersonate": "auto_impersonate",
    "blockTime": "block_time",
    "protocolVersion": "protocol_version",
    "enforceBytecodeCompression": "enforce_bytecode_compression",
    "systemContractsPath": "system_contracts_path",
    "showNodeConfig": "show_node_config",
    "verbosity": "verbosity",
    "timestamp": "timestamp",
    "init": "init_file",
    "state": "state",
    "stateInterval": "state_interval",
    "dumpState": "dump_state",
    "preserveHistoricalStates": "preserve_historical_states",
    "loadState": "load_state",
    "noMining": "no_mining",
    "allowOrigin": "allow_origin",
    "noCors": "no_cors",
    "order": "order",
    "spawnL1": "spawn_l1",
    "externalL1": "external_l1",
    "autoExecuteL1": "auto_execute_l1",
    "baseTokenSymbol": "base_token_symbol",
    "baseTokenRatio": "base_token_ratio",
    "extra-args": "extra_args",
    "healthCheckRetries": "health_check_retries",
    "healthCheckWarmup": "health_check_warmup",
    "healthCheckInterval": "health_check_interval",
}

# Fallback used when a boolean input is left empty.
BOOL_FALLBACKS: dict[str, bool] = {
    f.name: f.default for f in fields(ActionInputs) if f.type in (bool, "bool")
}


def get_bool(source: ConfigSource, name: str, fallback: bool = False) -> bool:
    """Only the literal ``"true"`` is true; an empty input takes ``fallback``."""
    value = source.get_input(name)
    if value == "":
        return fallback
    return value == "true"


def resolve_inputs(source: ConfigSource) -> ActionInputs:
    """
    Build the configuration record from ``source``.

    Empty values become the documented default, or ``None`` for options
    without one. Reading inputs is the only side effect.
    """
    values: dict[str, str | bool | None] = {}
    for name, attr in INPUT_FIELDS.items():
        if attr in BOOL_FALLBACKS:
            values[attr] = get_bool(source, name, BOOL_FALLBACKS[attr])
        else:
            values[attr] = source.get_input(name) or DEFAULTS.get(name)
    return ActionInputs(**values)  # type: ignore[arg-type]
