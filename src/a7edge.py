"""a7 edge: serves versioned assets and expands partial asset requests."""

import sys

from args import parse_args
from cli_serve import run_edge_server, run_metadata
from constants import ExitCodes


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    if args.command == "serve":
        run_edge_server(args)
        return ExitCodes.SUCCESS.value
    return run_metadata(args)


if __name__ == "__main__":
    sys.exit(main())
