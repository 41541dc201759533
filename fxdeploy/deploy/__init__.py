"""Deploy library: environment resolution, request building, orchestration."""

from fxdeploy.deploy.environment import merge_env_files, read_env_file, resolve_environment
from fxdeploy.deploy.orchestrate import FunctionResult, deploy_function, run_deploy
from fxdeploy.deploy.push import make_push_image
from fxdeploy.deploy.request import DeployRequest, build_annotations, build_deploy_request
from fxdeploy.deploy.validate import validate_mode_flags, validate_run

__all__ = [
    "DeployRequest",
    "FunctionResult",
    "build_annotations",
    "build_deploy_request",
    "deploy_function",
    "make_push_image",
    "merge_env_files",
    "read_env_file",
    "resolve_environment",
    "run_deploy",
    "validate_mode_flags",
    "validate_run",
]
