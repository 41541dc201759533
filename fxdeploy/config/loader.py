"""Stack file loading and gateway address resolution."""

import dataclasses
import logging
import os

import httpx
import yaml

from fxdeploy.config.types import DeploymentRun, FunctionSpec
from fxdeploy.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_GATEWAY = "127.0.0.1:31113"
GATEWAY_ENV_VAR = "FX_GATEWAY"


def load_stack(config_path) -> DeploymentRun:
    """Load a stack YAML file into a DeploymentRun.

    Function order follows the order of the ``functions:`` mapping in the file.
    """
    if not os.path.isfile(config_path):
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML config '{config_path}': {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file '{config_path}' must contain a mapping")

    openfx = raw.get("openfx") or {}
    if not isinstance(openfx, dict):
        raise ConfigurationError("'openfx' section must be a mapping")

    functions_raw = raw.get("functions") or {}
    if not isinstance(functions_raw, dict):
        raise ConfigurationError("'functions' section must be a mapping of name -> function")

    functions = {str(name): FunctionSpec.from_dict(str(name), body) for name, body in functions_raw.items()}
    logger.debug(f"Loaded {len(functions)} function(s) from {config_path}")

    return DeploymentRun(functions=functions, gateway=str(openfx.get("fxgateway") or ""))


def normalize_gateway(address: str) -> str:
    """Strip scheme and trailing slashes: 'http://host:port/' -> 'host:port'."""
    address = address.strip()
    for scheme in ("http://", "https://"):
        if address.startswith(scheme):
            address = address[len(scheme):]
            break
    return address.rstrip("/")


def resolve_gateway(flag_value=None, config_value=None) -> str:
    """Pick the gateway address: flag, then config file, then $FX_GATEWAY, then default.

    Raises ConfigurationError if the chosen address is not a valid host[:port].
    """
    for candidate in (flag_value, config_value, os.environ.get(GATEWAY_ENV_VAR)):
        if candidate:
            address = normalize_gateway(candidate)
            try:
                httpx.URL(f"http://{address}")
            except httpx.InvalidURL as e:
                raise ConfigurationError(f"invalid gateway address '{address}': {e}") from e
            return address
    return DEFAULT_GATEWAY


def apply_registry_override(run: DeploymentRun, registry) -> DeploymentRun:
    """Return a copy of *run* with every function's registry_url set to *registry*."""
    if not registry:
        return run
    functions = {name: dataclasses.replace(fn, registry_url=registry) for name, fn in run.functions.items()}
    return dataclasses.replace(run, functions=functions)
