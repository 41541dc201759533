"""Gateway client: submit deploy requests over the gateway's HTTP API."""

import json
import logging

import httpx

from fxdeploy.deploy.request import DeployRequest
from fxdeploy.errors import RemoteDeployError

logger = logging.getLogger(__name__)

DEPLOY_PATH = "/system/functions"
DEFAULT_TIMEOUT = 60


def gateway_base_url(gateway):
    return f"http://{gateway}"


async def _api_request(method, url, payload, token, dry_run=False, timeout=DEFAULT_TIMEOUT, transport=None):
    """Make a gateway API request with an optional bearer token.

    Returns:
        Parsed JSON response (or raw text for non-JSON bodies), ``None`` in dry-run mode.
    """
    if dry_run:
        logger.info(f"[dry-run] {method} {url}")
        logger.info(f"[dry-run] payload: {json.dumps(payload, indent=2)}")
        return None

    headers = {"Content-Type": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    async with httpx.AsyncClient(transport=transport) as client:
        resp = await client.request(method, url, json=payload, headers=headers, timeout=timeout)
    resp.raise_for_status()
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


def make_submit_deploy(dry_run=False, timeout=DEFAULT_TIMEOUT, transport=None):
    """Create a submit_deploy callable.

    The callable is ``async submit_deploy(request, token)`` and raises
    RemoteDeployError when the gateway rejects the request or is unreachable.
    Failed requests are not retried.
    """

    async def submit_deploy(request: DeployRequest, token):
        url = f"{gateway_base_url(request.gateway)}{DEPLOY_PATH}"
        try:
            return await _api_request(
                "POST", url, request.to_dict(), token, dry_run=dry_run, timeout=timeout, transport=transport
            )
        except httpx.HTTPStatusError as e:
            body = e.response.text.strip()
            detail = f": {body}" if body else ""
            raise RemoteDeployError(
                f"gateway returned HTTP {e.response.status_code}{detail}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise RemoteDeployError(f"cannot reach gateway at {url}: {e}") from e
        except httpx.InvalidURL as e:
            raise RemoteDeployError(f"invalid gateway address '{request.gateway}': {e}") from e

    return submit_deploy
