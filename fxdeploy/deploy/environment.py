"""Environment resolution: env files in declared order, then inline variables."""

import logging

import yaml

from fxdeploy.config.types import stringify_scalar
from fxdeploy.errors import EnvFileParseError, EnvFileReadError

logger = logging.getLogger(__name__)


def read_env_file(path) -> dict[str, str]:
    """Read one environment file and return its ``environment:`` mapping.

    An empty file, or one without an ``environment`` key, yields ``{}``.
    """
    try:
        with open(path) as f:
            content = f.read()
    except OSError as e:
        raise EnvFileReadError(f"cannot read environment file '{path}': {e.strerror or e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise EnvFileParseError(f"invalid YAML in environment file '{path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise EnvFileParseError(f"environment file '{path}' must contain a mapping")

    env = data.get("environment")
    if env is None:
        return {}
    if not isinstance(env, dict):
        raise EnvFileParseError(f"'environment' in '{path}' must be a mapping of variable -> value")

    result = {}
    for key, value in env.items():
        if isinstance(value, (dict, list)):
            raise EnvFileParseError(f"variable '{key}' in '{path}' must be a scalar value")
        result[str(key)] = stringify_scalar(value)
    return result


def merge_env_files(file_paths) -> dict[str, str]:
    """Phase 1: merge env files in order. Later files override earlier ones."""
    merged = {}
    for path in file_paths:
        file_env = read_env_file(path)
        logger.debug(f"Loaded {len(file_env)} variable(s) from {path}")
        merged.update(file_env)
    return merged


def resolve_environment(inline_env, file_paths) -> dict[str, str]:
    """Resolve a function's environment.

    Phase 1 merges the env files (last file wins), phase 2 overlays the inline
    variables (inline always wins). Neither input is modified.
    """
    resolved = merge_env_files(file_paths)
    resolved.update(inline_env or {})
    return resolved
