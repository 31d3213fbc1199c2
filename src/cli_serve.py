"""CLI entry points for the edge server and the metadata generator."""

from __future__ import annotations

import ipaddress
import logging
import os
import sys
from typing import Any

from common.logging_utils import configure_logging
from constants import Constants, ExitCodes

logger = logging.getLogger(__name__)


def _is_local_bind_host(host: str) -> bool:
    """Return True if host is a loopback/local bind target."""
    if not host:
        return False
    host_lower = host.strip().lower()
    if host_lower in ("localhost",):
        return True
    try:
        return ipaddress.ip_address(host_lower).is_loopback
    except ValueError:
        # Non-IP hostnames are treated as non-local unless explicitly allowed.
        return False


def _enforce_local_binding(host: str, allow_external: bool) -> None:
    """Enforce local-only binding unless explicitly allowed."""
    if _is_local_bind_host(host):
        return
    if not allow_external:
        sys.stderr.write(
            "ERROR: Non-local bindings require --allow-external.\n"
        )
        sys.exit(ExitCodes.USAGE_ERROR.value)
    logger.warning(
        "Binding edge server to non-local address (%s). Ensure network controls are in place.",
        host,
    )


def run_edge_server(args: Any) -> None:
    """Entry point for the ``serve`` command.

    Args:
        args: Parsed CLI arguments namespace.
    """
    configure_logging(getattr(args, "LOG_LEVEL", None), getattr(args, "LOG_FILE", None))

    from edge.config import EdgeConfig  # pylint: disable=import-outside-toplevel
    from edge.server import run_edge_server_sync  # pylint: disable=import-outside-toplevel

    config = EdgeConfig.from_args(args)
    _enforce_local_binding(config.host, config.allow_external)

    if not os.path.isdir(config.volume_mount_path):
        sys.stderr.write(f"ERROR: Volume mount path not found: {config.volume_mount_path}\n")
        sys.exit(ExitCodes.FILE_ERROR.value)

    print(
        f"\n"
        f"  A7 Edge Server\n"
        f"  ==============\n"
        f"  Listening: http://{config.host}:{config.port}\n"
        f"  Volume:    {config.volume_mount_path}\n"
        f"\n"
        f"  Press Ctrl+C to stop\n"
    )

    run_edge_server_sync(config)


def run_metadata(args: Any) -> int:
    """Entry point for the ``metadata`` command.

    Returns:
        Process exit code.
    """
    configure_logging(getattr(args, "LOG_LEVEL", None), getattr(args, "LOG_FILE", None))

    from edge.metadata import generate_directory_metadata  # pylint: disable=import-outside-toplevel

    volume = getattr(args, "VOLUME", None) or os.environ.get(
        Constants.ENV_VOLUME_MOUNT_PATH, Constants.DEFAULT_VOLUME_MOUNT_PATH
    )
    mode = getattr(args, "MODE", None) or os.environ.get(Constants.ENV_PATH_AUTO_EXPAND_INIT)

    if not os.path.isdir(volume):
        logger.error("Volume mount path not found: %s", volume)
        return ExitCodes.FILE_ERROR.value

    generate_directory_metadata(volume, mode)
    return ExitCodes.SUCCESS.value
