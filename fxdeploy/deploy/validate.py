"""Run preconditions, checked before anything is pushed or deployed."""

from fxdeploy.config.types import DeploymentRun, RunConfig
from fxdeploy.errors import ConfigurationError


def validate_mode_flags(update: bool, replace: bool) -> None:
    if update and replace:
        raise ConfigurationError('one of "--update" flag or "--replace" flag must be false')


def validate_run(run_config: RunConfig, run: DeploymentRun) -> None:
    """Raise ConfigurationError if the run cannot start."""
    validate_mode_flags(run_config.update, run_config.replace)
    if not run.functions:
        raise ConfigurationError("no functions to deploy: the config file declares no functions")
    if run_config.min_replicas < 0:
        raise ConfigurationError(f"--min must be >= 0, got {run_config.min_replicas}")
    if run_config.min_replicas > run_config.max_replicas:
        raise ConfigurationError(
            f"--min ({run_config.min_replicas}) must not exceed --max ({run_config.max_replicas})"
        )
