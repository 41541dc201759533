"""Function commands: push images and deploy functions from a stack file."""

import argparse
import asyncio
import logging
import sys

from fxdeploy.config import (
    DEFAULT_REGISTRY_SECRET,
    RunConfig,
    apply_registry_override,
    load_stack,
    lookup_access_token,
    resolve_gateway,
)
from fxdeploy.deploy import make_push_image, run_deploy, validate_mode_flags
from fxdeploy.errors import FxDeployError
from fxdeploy.gateway import make_submit_deploy
from fxdeploy.redact import register_secret

logger = logging.getLogger(__name__)


def handle_deploy(args):
    """Handle 'function deploy'. Exits 1 unless every function is deployed."""
    try:
        ok = asyncio.run(_handle_deploy(args))
    except FxDeployError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)
    if not ok:
        sys.exit(1)


async def _handle_deploy(args):
    validate_mode_flags(args.update, args.replace)
    run = load_stack(args.config)
    run = apply_registry_override(run, args.registry)

    run_config = RunConfig(
        gateway=resolve_gateway(args.gateway, run.gateway),
        update=args.update,
        replace=args.replace,
        min_replicas=args.min,
        max_replicas=args.max,
        registry_secret=args.registry_secret,
        verbose=args.verbose,
        dry_run=args.dry_run,
        keep_going=args.keep_going,
    )

    token = lookup_access_token(args.token)
    register_secret(token)

    push_image = make_push_image(args.work_dir, verbose=run_config.verbose, dry_run=run_config.dry_run)
    submit_deploy = make_submit_deploy(dry_run=run_config.dry_run)

    results = await run_deploy(run, run_config, push_image, submit_deploy, token)

    failed = [r for r in results if not r.ok]
    if failed:
        logger.error(f"\nFailed to deploy {len(failed)} of {len(results)} function(s): {', '.join(r.name for r in failed)}")
        return False
    return True


def register_function_command(subparsers):
    """Register the function subcommand and its deploy action."""
    function_parser = subparsers.add_parser("function", help="Manage functions")
    function_subparsers = function_parser.add_subparsers(dest="action", required=True)

    parser = function_subparsers.add_parser(
        "deploy",
        help="Push function images and deploy them to the gateway",
        description="Push each function's image, then deploy it via the gateway, "
        "using the stack file given with -f.",
    )
    parser.add_argument("-f", "--config", required=True, help="Path to YAML config file describing function(s)")
    parser.add_argument("-g", "--gateway", default=None, help="Gateway address host:port (default: config file, then $FX_GATEWAY)")
    parser.add_argument("--registry", default=None, help="Docker private registry URL, overrides docker_registry of every function")
    parser.add_argument("--token", default=None, help="Access token (default: $FX_ACCESS_TOKEN, then ~/.openfx/auth.yaml)")
    parser.add_argument(
        "--update",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Perform rolling update on existing function(s)",
    )
    parser.add_argument(
        "--replace",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Remove and re-create existing function(s); requires --no-update",
    )
    parser.add_argument("--min", type=int, default=1, help="Minimum replicas per function")
    parser.add_argument("--max", type=int, default=1, help="Maximum replicas per function")
    parser.add_argument(
        "--registry-secret",
        default=DEFAULT_REGISTRY_SECRET,
        help=f"Registry pull secret added to every function (default: {DEFAULT_REGISTRY_SECRET})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Stream docker push output")
    parser.add_argument("--keep-going", action="store_true", help="Continue with remaining functions after a failure")
    parser.add_argument("--work-dir", default="./", help="Working directory for docker push")
    parser.add_argument("--dry-run", action="store_true", help="Print commands and requests without executing")
    parser.set_defaults(func=handle_deploy)
