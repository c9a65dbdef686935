"""Argument parsing functionality for peercheck."""

import argparse


def build_parser(prog, description, workspace_flag):
    """Build the parser shared by both console scripts."""
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        epilog=(
            f"Pass {workspace_flag} to check every workspace directory. "
            f"Arguments after {workspace_flag} are passed to the package manager."
        ),
        add_help=True,
        allow_abbrev=False,
    )
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    return parser


def parse_args(argv, workspace_flag, prog="check-peer-deps",
               description="Find and install missing peer dependencies"):
    """Parses the arguments passed to the program.

    Everything after ``workspace_flag`` is kept verbatim for the package
    manager. Tokens before it that the parser does not know are passed
    through as well.

    Args:
        argv (list): Command line tokens without the program name.
        workspace_flag (str): Flag that turns on workspace mode ("-ws" or "-w").

    Returns:
        argparse.Namespace: Parsed options plus WORKSPACE and EXTRA_ARGS.
    """
    argv = list(argv)
    if workspace_flag in argv:
        idx = argv.index(workspace_flag)
        head, tail = argv[:idx], argv[idx + 1:]
        workspace = True
    else:
        head, tail = argv, []
        workspace = False

    parser = build_parser(prog, description, workspace_flag)
    ns, unknown = parser.parse_known_args(head)
    ns.WORKSPACE = workspace
    ns.EXTRA_ARGS = unknown + tail
    return ns
