"""Stack configuration dataclass types."""

from dataclasses import dataclass, field

from fxdeploy.errors import ConfigurationError

DEFAULT_REGISTRY_SECRET = "regcred"


def stringify_scalar(value) -> str:
    """Render a YAML scalar the way it would appear in a container env."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _string_map(d, what: str) -> dict[str, str]:
    if d is None:
        return {}
    if not isinstance(d, dict):
        raise ConfigurationError(f"{what} must be a mapping, got {type(d).__name__}")
    return {str(k): stringify_scalar(v) for k, v in d.items()}


def _string_list(items, what: str) -> list[str]:
    if items is None:
        return []
    if isinstance(items, str):
        return [items]
    if not isinstance(items, list):
        raise ConfigurationError(f"{what} must be a list, got {type(items).__name__}")
    return [str(i) for i in items]


@dataclass
class FunctionResources:
    """Container resource quantities (limits or requests)."""

    memory: str | None = None
    cpu: str | None = None
    gpu: str | None = None

    @classmethod
    def from_dict(cls, d: dict | None, what: str = "resources") -> "FunctionResources | None":
        if d is None:
            return None
        if not isinstance(d, dict):
            raise ConfigurationError(f"{what} must be a mapping, got {type(d).__name__}")
        unknown = set(d) - {"memory", "cpu", "gpu"}
        if unknown:
            raise ConfigurationError(f"{what} has unknown keys: {', '.join(sorted(unknown))}")
        return cls(
            memory=stringify_scalar(d["memory"]) if d.get("memory") is not None else None,
            cpu=stringify_scalar(d["cpu"]) if d.get("cpu") is not None else None,
            gpu=stringify_scalar(d["gpu"]) if d.get("gpu") is not None else None,
        )

    def to_dict(self) -> dict:
        return {k: v for k, v in (("memory", self.memory), ("cpu", self.cpu), ("gpu", self.gpu)) if v is not None}


@dataclass
class FunctionSpec:
    """Declarative description of one function in the stack file."""

    name: str
    image: str
    environment: dict[str, str] = field(default_factory=dict)
    environment_file: list[str] = field(default_factory=list)
    labels: dict[str, str] | None = None
    maintainer: str = ""
    description: str = ""
    constraints: list[str] = field(default_factory=list)
    secrets: list[str] = field(default_factory=list)
    limits: FunctionResources | None = None
    requests: FunctionResources | None = None
    registry_url: str = ""

    @classmethod
    def from_dict(cls, name: str, d: dict) -> "FunctionSpec":
        """Build a FunctionSpec from its entry under ``functions:``."""
        if not isinstance(d, dict):
            raise ConfigurationError(f"Function '{name}' must be a mapping")
        image = d.get("image")
        if not image:
            raise ConfigurationError(f"Function '{name}' is missing 'image'")

        labels = d.get("labels")
        return cls(
            name=name,
            image=str(image),
            environment=_string_map(d.get("environment"), f"functions.{name}.environment"),
            environment_file=_string_list(d.get("environment_file"), f"functions.{name}.environment_file"),
            labels=_string_map(labels, f"functions.{name}.labels") if labels is not None else None,
            maintainer=stringify_scalar(d.get("maintainer")),
            description=stringify_scalar(d.get("desc", d.get("description"))),
            constraints=_string_list(d.get("constraints"), f"functions.{name}.constraints"),
            secrets=_string_list(d.get("secrets"), f"functions.{name}.secrets"),
            limits=FunctionResources.from_dict(d.get("limits"), f"functions.{name}.limits"),
            requests=FunctionResources.from_dict(d.get("requests"), f"functions.{name}.requests"),
            registry_url=stringify_scalar(d.get("docker_registry")),
        )


@dataclass(frozen=True)
class RunConfig:
    """Run-level settings shared read-only by every function in a run."""

    gateway: str
    update: bool = True
    replace: bool = False
    min_replicas: int = 1
    max_replicas: int = 1
    registry_secret: str = DEFAULT_REGISTRY_SECRET
    verbose: bool = False
    dry_run: bool = False
    keep_going: bool = False


@dataclass
class DeploymentRun:
    """Ordered functions from one stack file, plus its gateway address."""

    functions: dict[str, FunctionSpec] = field(default_factory=dict)
    gateway: str = ""
