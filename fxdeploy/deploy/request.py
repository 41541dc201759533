"""Deploy request type and builder."""

from dataclasses import dataclass, field

from fxdeploy.config.types import FunctionResources, FunctionSpec, RunConfig


@dataclass
class DeployRequest:
    """One function deployment as submitted to the gateway."""

    gateway: str
    function_name: str
    image: str
    env_vars: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    constraints: list[str] = field(default_factory=list)
    secrets: list[str] = field(default_factory=list)
    limits: FunctionResources | None = None
    requests: FunctionResources | None = None
    registry_url: str = ""
    min_replicas: int = 1
    max_replicas: int = 1
    update: bool = True
    replace: bool = False

    @property
    def trigger_url(self) -> str:
        """HTTP invocation endpoint of the deployed function."""
        return f"http://{self.gateway}/function/{self.function_name}"

    def to_dict(self) -> dict:
        """JSON body for the gateway. Gateway address is transport, not payload."""
        return {
            "function_name": self.function_name,
            "image": self.image,
            "env_vars": dict(self.env_vars),
            "labels": dict(self.labels),
            "annotations": dict(self.annotations),
            "constraints": list(self.constraints),
            "secrets": list(self.secrets),
            "limits": self.limits.to_dict() if self.limits else None,
            "requests": self.requests.to_dict() if self.requests else None,
            "registry_url": self.registry_url,
            "min_replicas": self.min_replicas,
            "max_replicas": self.max_replicas,
            "update": self.update,
            "replace": self.replace,
        }


def build_annotations(function: FunctionSpec) -> dict[str, str]:
    annotations = {}
    if function.maintainer:
        annotations["maintainer"] = function.maintainer
    if function.description:
        annotations["desc"] = function.description
    return annotations


def build_deploy_request(function: FunctionSpec, run_config: RunConfig, env: dict[str, str]) -> DeployRequest:
    """Assemble the DeployRequest for *function* with its resolved environment.

    Replica bounds and update/replace come from the run, not the function.
    The registry secret is always appended, even if already declared.
    """
    return DeployRequest(
        gateway=run_config.gateway,
        function_name=function.name,
        image=function.image,
        env_vars=dict(env),
        labels=dict(function.labels) if function.labels else {},
        annotations=build_annotations(function),
        constraints=list(function.constraints),
        secrets=[*function.secrets, run_config.registry_secret],
        limits=function.limits,
        requests=function.requests,
        registry_url=function.registry_url,
        min_replicas=run_config.min_replicas,
        max_replicas=run_config.max_replicas,
        update=run_config.update,
        replace=run_config.replace,
    )
