"""Shared pytest fixtures for all test modules."""

import os
import subprocess
import sys

import pytest
import yaml

from fxdeploy.config.types import FunctionSpec, RunConfig

PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))


@pytest.fixture(scope="session")
def project_root():
    """Absolute path to the project root directory."""
    return PROJECT_ROOT


@pytest.fixture(scope="session")
def run_cli(project_root):
    """Return a callable that invokes the fxdeploy CLI as a subprocess."""

    def _run(*args, env=None):
        full_env = dict(os.environ)
        for var in ("FX_ACCESS_TOKEN", "FX_GATEWAY"):
            full_env.pop(var, None)
        # keep ~/.openfx/auth.yaml of the developer out of the tests
        full_env["HOME"] = os.path.join(project_root, "tests", "_no_home")
        full_env.update(env or {})
        result = subprocess.run(
            [sys.executable, "-m", "fxdeploy.fxdeploy", *args],
            capture_output=True,
            text=True,
            cwd=project_root,
            env=full_env,
        )
        return result.returncode, result.stdout, result.stderr

    return _run


# ── Unit-test fixtures ──────────────────────────────────────────────


@pytest.fixture
def make_env_file(tmp_path):
    """Return a factory that writes an environment YAML file and returns its path."""

    def _make(name, environment=None, raw=None):
        path = tmp_path / name
        if raw is not None:
            path.write_text(raw)
        else:
            with open(path, "w") as f:
                yaml.dump({"environment": environment or {}}, f)
        return str(path)

    return _make


@pytest.fixture
def make_stack(tmp_path):
    """Return a factory that writes a stack config.yml and returns its path."""

    def _make(functions, gateway="10.0.0.180:31113", name="config.yml"):
        config = {"functions": functions}
        if gateway is not None:
            config["openfx"] = {"fxgateway": gateway}
        path = tmp_path / name
        with open(path, "w") as f:
            yaml.dump(config, f, sort_keys=False)
        return str(path)

    return _make


@pytest.fixture
def echo_function():
    """A minimal function with inline environment and no labels."""
    return FunctionSpec(name="echo", image="registry:5000/echo:latest", environment={"X": "1"})


@pytest.fixture
def run_config():
    return RunConfig(gateway="10.0.0.180:31113")
