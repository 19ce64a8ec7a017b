"""Tests for input validation."""

import pytest

from anvil_action.config import ActionInputs, parse_port, validate_inputs
from anvil_action.errors import ConfigurationError


@pytest.mark.parametrize("port", ["1", "8011", "65535"])
def test_valid_ports(port):
    validate_inputs(ActionInputs(port=port))
    assert parse_port(port) == int(port)


@pytest.mark.parametrize("port", ["0", "65536", "abc", "-1", ""])
def test_invalid_ports(port):
    with pytest.raises(ConfigurationError, match="Invalid port"):
        validate_inputs(ActionInputs(port=port))


@pytest.mark.parametrize("mode", ["", "start", "RUN", "fork-run"])
def test_invalid_mode(mode):
    with pytest.raises(ConfigurationError, match="Invalid mode"):
        validate_inputs(ActionInputs(mode=mode))


def test_fork_requires_url():
    with pytest.raises(ConfigurationError, match="forkUrl is required"):
        validate_inputs(ActionInputs(mode="fork"))


def test_fork_with_url():
    validate_inputs(ActionInputs(mode="fork", fork_url="https://example"))


def test_mode_checked_before_port():
    with pytest.raises(ConfigurationError, match="Invalid mode"):
        validate_inputs(ActionInputs(mode="bogus", port="0"))


@pytest.mark.parametrize("verbosity", ["-1", "loud", "1.5"])
def test_invalid_verbosity(verbosity):
    with pytest.raises(ConfigurationError, match="Invalid verbosity"):
        validate_inputs(ActionInputs(verbosity=verbosity))


@pytest.mark.parametrize(
    "overrides, match",
    [
        ({"health_check_retries": "0"}, "healthCheckRetries"),
        ({"health_check_retries": "many"}, "healthCheckRetries"),
        ({"health_check_warmup": "-2"}, "healthCheckWarmup"),
        ({"health_check_interval": "soon"}, "healthCheckInterval"),
        ({"health_check_warmup": "inf"}, "healthCheckWarmup"),
        ({"health_check_interval": "nan"}, "healthCheckInterval"),
        ({"health_check_interval": "-inf"}, "healthCheckInterval"),
    ],
)
def test_invalid_probe_tuning(overrides, match):
    with pytest.raises(ConfigurationError, match=match):
        validate_inputs(ActionInputs(**overrides))


def test_probe_tuning_accepts_zero_delay():
    validate_inputs(ActionInputs(health_check_warmup="0", health_check_interval="0.5"))
