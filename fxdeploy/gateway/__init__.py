"""Gateway API client."""

from fxdeploy.gateway.client import DEPLOY_PATH, gateway_base_url, make_submit_deploy

__all__ = [
    "DEPLOY_PATH",
    "gateway_base_url",
    "make_submit_deploy",
]
