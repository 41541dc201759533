"""Exception hierarchy for configuration and per-function deploy failures."""


class FxDeployError(Exception):
    """Base class for every error the deploy command reports to the user."""


class ConfigurationError(FxDeployError):
    """Invalid flags or stack configuration, raised before any I/O."""


class FunctionDeployError(FxDeployError):
    """A failure tied to one function of the run."""

    stage = "deploy"

    def __init__(self, message, function_name=None):
        super().__init__(message)
        self.message = message
        self.function_name = function_name

    def __str__(self):
        if self.function_name:
            return f"{self.stage} failed for function '{self.function_name}': {self.message}"
        return self.message


class EnvironmentResolutionError(FunctionDeployError):
    stage = "environment"


class EnvFileReadError(EnvironmentResolutionError):
    """An environment file is missing or unreadable."""


class EnvFileParseError(EnvironmentResolutionError):
    """An environment file is not a valid variable mapping."""


class PushError(FunctionDeployError):
    stage = "push"


class RemoteDeployError(FunctionDeployError):
    """The gateway rejected the deploy request or could not be reached."""

    stage = "deploy"

    def __init__(self, message, function_name=None, status_code=None):
        super().__init__(message, function_name=function_name)
        self.status_code = status_code
