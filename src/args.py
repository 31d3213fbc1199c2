"""Argument parsing functionality for the a7 edge server."""

import argparse

from constants import Constants


def _add_logging_args(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="a7-edge",
        description="a7 edge - versioned asset resolution and serving",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the asset edge server")
    serve.add_argument("-c", "--config",
                       dest="CONFIG",
                       help="YAML config file (an 'edge' section or a flat mapping)",
                       action="store", type=str)
    serve.add_argument("--host",
                       dest="HOST",
                       help=f"Bind address (default: {Constants.DEFAULT_HOST})",
                       action="store", type=str)
    serve.add_argument("-p", "--port",
                       dest="PORT",
                       help=f"Bind port (default: {Constants.DEFAULT_PORT})",
                       action="store", type=int)
    serve.add_argument("-v", "--volume",
                       dest="VOLUME",
                       help="Volume mount path holding name@version directories",
                       action="store", type=str)
    serve.add_argument("--catalog-ttl",
                       dest="CATALOG_TTL",
                       help="Seconds to reuse a catalog listing (0 disables)",
                       action="store", type=int)
    serve.add_argument("--cors-all",
                       dest="CORS_ALL",
                       help="Attach wildcard CORS headers to redirects",
                       action="store_true")
    serve.add_argument("--auto-resolve",
                       dest="PATH_AUTO_RESOLVE",
                       help="Follow redirects internally instead of answering 302",
                       action="store_true")
    serve.add_argument("--serve-files",
                       dest="SERVE_FILES",
                       help="Let the expander serve complete URIs directly",
                       action="store_true")
    serve.add_argument("--allow-external",
                       dest="ALLOW_EXTERNAL",
                       help="Allow binding to non-loopback addresses",
                       action="store_true")
    _add_logging_args(serve)

    metadata = subparsers.add_parser(
        "metadata", help="Generate .directory.txt listings for every directory"
    )
    metadata.add_argument("-v", "--volume",
                          dest="VOLUME",
                          help="Volume mount path (default: $A7_VOLUME_MOUNT_PATH)",
                          action="store", type=str)
    metadata.add_argument("-m", "--mode",
                          dest="MODE",
                          help="'true' writes missing files, 'always' rewrites all "
                               "(default: $A7_PATH_AUTO_EXPAND_INIT)",
                          action="store", type=str)
    _add_logging_args(metadata)

    return parser.parse_args(argv)
