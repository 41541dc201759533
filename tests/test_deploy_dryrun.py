"""Dry-run end-to-end tests for the function deploy command."""

import pytest


@pytest.fixture
def two_function_stack(make_stack, make_env_file):
    env_file = make_env_file("env.yml", {"SHARED": "from-file", "X": "file"})
    return make_stack(
        {
            "echo": {
                "image": "registry:5000/echo:latest",
                "maintainer": "Alice",
                "docker_registry": "registry:5000",
                "environment": {"X": "1"},
                "environment_file": [env_file],
            },
            "resize": {"image": "registry:5000/resize:latest", "secrets": ["s3-key"]},
        }
    )


class TestDryRunDeploy:
    def test_deploy(self, run_cli, two_function_stack):
        rc, stdout, _ = run_cli("function", "deploy", "-f", two_function_stack, "--dry-run")
        assert rc == 0
        assert "Pushing: echo, Image: registry:5000/echo:latest in Registry: registry:5000 ..." in stdout
        assert "[dry-run] docker push registry:5000/echo:latest" in stdout
        assert "[dry-run] POST http://10.0.0.180:31113/system/functions" in stdout
        assert "http trigger url: http://10.0.0.180:31113/function/echo" in stdout
        assert "http trigger url: http://10.0.0.180:31113/function/resize" in stdout

    def test_deploy_sequence(self, run_cli, two_function_stack):
        rc, stdout, _ = run_cli("function", "deploy", "-f", two_function_stack, "--dry-run")
        assert rc == 0
        markers = [
            "[dry-run] docker push registry:5000/echo:latest",
            "Deploying: echo ...",
            "function/echo",
            "[dry-run] docker push registry:5000/resize:latest",
            "Deploying: resize ...",
            "function/resize",
        ]
        positions = [stdout.index(m) for m in markers]
        assert positions == sorted(positions)

    def test_payload_contents(self, run_cli, two_function_stack):
        rc, stdout, _ = run_cli("function", "deploy", "-f", two_function_stack, "--dry-run", "--min", "2", "--max", "3")
        assert rc == 0
        assert '"X": "1"' in stdout
        assert '"SHARED": "from-file"' in stdout
        assert '"maintainer": "Alice"' in stdout
        assert '"s3-key"' in stdout
        assert '"regcred"' in stdout
        assert '"min_replicas": 2' in stdout
        assert '"max_replicas": 3' in stdout

    def test_gateway_flag_overrides_config(self, run_cli, two_function_stack):
        rc, stdout, _ = run_cli("function", "deploy", "-f", two_function_stack, "--dry-run", "-g", "http://gw.local:8080/")
        assert rc == 0
        assert "http trigger url: http://gw.local:8080/function/echo" in stdout

    def test_registry_flag_overrides_config(self, run_cli, two_function_stack):
        rc, stdout, _ = run_cli("function", "deploy", "-f", two_function_stack, "--dry-run", "--registry", "127.0.0.1:5000")
        assert rc == 0
        assert "in Registry: 127.0.0.1:5000 ..." in stdout

    def test_token_redacted_from_output(self, run_cli, two_function_stack):
        rc, stdout, _ = run_cli(
            "function", "deploy", "-f", two_function_stack, "--dry-run", "-g", "gw-SuperSecretToken:1",
            "--token", "gw-SuperSecretToken",
        )
        assert rc == 0
        assert "gw-SuperSecretToken" not in stdout
        assert "http://***:1/function/echo" in stdout


class TestDeployErrors:
    def test_update_and_replace_conflict(self, run_cli, two_function_stack):
        rc, stdout, _ = run_cli("function", "deploy", "-f", two_function_stack, "--dry-run", "--replace")
        assert rc == 1
        assert '"--update" flag or "--replace" flag must be false' in stdout
        assert "docker push" not in stdout

    def test_replace_with_no_update(self, run_cli, two_function_stack):
        rc, stdout, _ = run_cli("function", "deploy", "-f", two_function_stack, "--dry-run", "--replace", "--no-update")
        assert rc == 0
        assert '"replace": true' in stdout

    def test_empty_stack(self, run_cli, make_stack):
        rc, stdout, _ = run_cli("function", "deploy", "-f", make_stack({}), "--dry-run")
        assert rc == 1
        assert "no functions to deploy" in stdout

    def test_missing_config(self, run_cli, tmp_path):
        rc, stdout, _ = run_cli("function", "deploy", "-f", str(tmp_path / "missing.yml"), "--dry-run")
        assert rc == 1
        assert "Config file not found" in stdout

    def test_config_flag_required(self, run_cli):
        rc, _, stderr = run_cli("function", "deploy")
        assert rc == 2
        assert "-f/--config" in stderr

    def test_missing_env_file_aborts_run(self, run_cli, make_stack, tmp_path):
        stack = make_stack(
            {
                "first": {"image": "first:latest", "environment_file": [str(tmp_path / "missing.yml")]},
                "second": {"image": "second:latest"},
            }
        )
        rc, stdout, _ = run_cli("function", "deploy", "-f", stack, "--dry-run")
        assert rc == 1
        assert "function 'first'" in stdout
        assert "second:latest" not in stdout

    def test_keep_going_deploys_remaining(self, run_cli, make_stack, tmp_path):
        stack = make_stack(
            {
                "first": {"image": "first:latest", "environment_file": [str(tmp_path / "missing.yml")]},
                "second": {"image": "second:latest"},
            }
        )
        rc, stdout, _ = run_cli("function", "deploy", "-f", stack, "--dry-run", "--keep-going")
        assert rc == 1
        assert "function/second" in stdout
        assert "Failed to deploy 1 of 2 function(s): first" in stdout

    def test_invalid_gateway_port_reports_error(self, run_cli, two_function_stack):
        rc, stdout, stderr = run_cli("function", "deploy", "-f", two_function_stack, "--dry-run", "-g", "gw:notaport")
        assert rc == 1
        assert "invalid gateway address 'gw:notaport'" in stdout
        assert "Traceback" not in stderr
        assert "docker push" not in stdout

    def test_mode_conflict_reported_before_config_load(self, run_cli, tmp_path):
        rc, stdout, _ = run_cli("function", "deploy", "-f", str(tmp_path / "missing.yml"), "--replace")
        assert rc == 1
        assert '"--update" flag or "--replace" flag must be false' in stdout
        assert "Config file not found" not in stdout
