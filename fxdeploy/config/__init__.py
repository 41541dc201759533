"""Stack configuration: types, YAML loading, gateway and token lookup."""

from fxdeploy.config.auth import lookup_access_token
from fxdeploy.config.loader import (
    DEFAULT_GATEWAY,
    apply_registry_override,
    load_stack,
    normalize_gateway,
    resolve_gateway,
)
from fxdeploy.config.types import (
    DEFAULT_REGISTRY_SECRET,
    DeploymentRun,
    FunctionResources,
    FunctionSpec,
    RunConfig,
)

__all__ = [
    "DEFAULT_GATEWAY",
    "DEFAULT_REGISTRY_SECRET",
    "DeploymentRun",
    "FunctionResources",
    "FunctionSpec",
    "RunConfig",
    "apply_registry_override",
    "load_stack",
    "lookup_access_token",
    "normalize_gateway",
    "resolve_gateway",
]
