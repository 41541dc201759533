"""Deploy orchestration: push, resolve environment, build request, submit."""

import logging
from dataclasses import dataclass

from fxdeploy.config.types import DeploymentRun, FunctionSpec, RunConfig
from fxdeploy.deploy.environment import resolve_environment
from fxdeploy.deploy.request import build_deploy_request
from fxdeploy.deploy.validate import validate_run
from fxdeploy.errors import FunctionDeployError, PushError

logger = logging.getLogger(__name__)


@dataclass
class FunctionResult:
    """Outcome of one function when the run continues past failures."""

    name: str
    url: str | None = None
    error: FunctionDeployError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _push_failure_detail(returncode, stderr):
    lines = [line for line in (stderr or "").strip().splitlines() if line.strip()]
    if lines:
        return lines[-1]
    return f"exit status {returncode}"


async def deploy_function(function: FunctionSpec, run_config: RunConfig, push_image, submit_deploy, token) -> str:
    """Push and deploy a single function. Returns its trigger URL.

    Raises a FunctionDeployError subclass tagged with the function name.
    A push failure stops before the deploy request is built; a deploy
    failure leaves the pushed image in place.
    """
    try:
        logger.info(f"Pushing: {function.name}, Image: {function.image} in Registry: {function.registry_url} ...")
        rc, _, stderr = await push_image(function.image)
        if rc != 0:
            raise PushError(f"docker push {function.image} failed: {_push_failure_detail(rc, stderr)}")

        env = resolve_environment(function.environment, function.environment_file)
        request = build_deploy_request(function, run_config, env)

        logger.info(f"Deploying: {function.name} ...")
        await submit_deploy(request, token)
    except FunctionDeployError as e:
        if e.function_name is None:
            e.function_name = function.name
        raise

    logger.info(f"http trigger url: {request.trigger_url}")
    return request.trigger_url


async def run_deploy(run: DeploymentRun, run_config: RunConfig, push_image, submit_deploy, token="") -> list[FunctionResult]:
    """Deploy every function of the run, one at a time, in config order.

    Args:
        run: loaded stack (functions in file order)
        run_config: run-level flags shared by every function
        push_image: async callable(image) -> (returncode, stdout, stderr)
        submit_deploy: async callable(request, token); raises RemoteDeployError
        token: gateway access token

    By default the first failure aborts the run and is raised; functions
    already deployed stay deployed. With ``run_config.keep_going`` every
    function is attempted and failures are returned in the result list.
    """
    validate_run(run_config, run)

    results = []
    for function in run.functions.values():
        try:
            url = await deploy_function(function, run_config, push_image, submit_deploy, token)
        except FunctionDeployError as e:
            if not run_config.keep_going:
                raise
            logger.error(f"Error: {e}")
            results.append(FunctionResult(name=function.name, error=e))
            continue
        results.append(FunctionResult(name=function.name, url=url))

    return results
