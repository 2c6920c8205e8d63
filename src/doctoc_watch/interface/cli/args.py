from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command line schema (short flags plus their camelCase long
forms) and translates the parsed namespace into configuration
overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from doctoc_watch import __version__
from doctoc_watch.domain.constants import APP_NAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the doctoc-watch CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Run doctoc on a markdown document and append a linked list of "
            "watched files, regenerating it whenever files are added or removed."
        ),
    )
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

    # --- Target document ---
    p.add_argument(
        "-t", "--target",
        dest="target",
        default=None,
        help="Target file (default: README.md).",
    )
    p.add_argument(
        "-T", "--targetHeader",
        dest="target_header",
        default=None,
        help="Markdown formatted header replacing the doctoc title.",
    )

    # --- Watched set ---
    p.add_argument(
        "-l", "--listFiles",
        dest="list_files",
        default=None,
        help="Comma separated glob patterns of files to watch.",
    )
    p.add_argument(
        "-L", "--listFilesHeader",
        dest="list_files_header",
        default=None,
        help="Markdown formatted header of the file list.",
    )
    p.add_argument(
        "--cwd",
        dest="working_dir",
        default=None,
        help="Directory patterns and links are relative to (default: current directory).",
    )

    # --- Runtime ---
    p.add_argument(
        "-v", "--output",
        dest="verbose",
        action="store_true",
        help="Verbose output of options and watch events.",
    )
    p.add_argument(
        "-r", "--runOnce",
        dest="run_once",
        action="store_true",
        help="Run only once, without watching.",
    )
    p.add_argument(
        "--doctoc-cmd",
        dest="doctoc_command",
        default=None,
        help="DocToc executable (default: doctoc).",
    )
    p.add_argument(
        "--interval",
        dest="interval",
        type=float,
        default=None,
        help="Polling interval in seconds (default: 1.0).",
    )

    # --- Configuration and diagnostics ---
    p.add_argument(
        "-c", "--config",
        dest="config_file",
        default=None,
        help="JSON file with default option values.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Flags that were not given map to None so they do not mask values coming
    from the configuration file.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides.
    """
    overrides: Dict[str, Any] = {
        "target": args.target,
        "target_header": args.target_header,
        "list_files": _split_csv(args.list_files),
        "list_files_header": args.list_files_header,
        "working_dir": args.working_dir,
        "doctoc_command": args.doctoc_command,
        "interval": args.interval,
    }

    if args.verbose:
        overrides["verbose"] = True
    if args.run_once:
        overrides["run_once"] = True

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of trimmed items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
