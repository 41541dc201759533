"""Access token lookup for the gateway."""

import logging
import os

import yaml

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "FX_ACCESS_TOKEN"
DEFAULT_AUTH_FILE = "~/.openfx/auth.yaml"


def _read_auth_file(auth_path) -> str:
    path = os.path.expanduser(auth_path)
    if not os.path.isfile(path):
        return ""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Warning: ignoring unreadable auth file {path}: {e}")
        return ""
    if not isinstance(data, dict):
        logger.warning(f"Warning: ignoring auth file {path}: expected a mapping")
        return ""
    return str(data.get("access_token") or "")


def lookup_access_token(flag_value=None, auth_path=DEFAULT_AUTH_FILE) -> str:
    """Resolve the token: --token flag, then $FX_ACCESS_TOKEN, then the auth file."""
    if flag_value:
        return flag_value
    env_token = os.environ.get(TOKEN_ENV_VAR, "")
    if env_token:
        return env_token
    return _read_auth_file(auth_path)
