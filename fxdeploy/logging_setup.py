"""CLI logging setup: plain %(message)s output on stdout."""

import logging
import sys

from fxdeploy.redact import SecretRedactingFilter


def setup_cli_logging(debug=False):
    """Configure the root logger for CLI commands.

    Messages are printed bare, like print(). ``debug`` lowers the level to
    DEBUG. Secret values are redacted on the handler so records from every
    logger pass through the filter.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.addFilter(SecretRedactingFilter())
    root.addHandler(handler)
    logging.getLogger("httpx").setLevel(logging.WARNING)
