from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Installs the global exception hook and delegates to the CLI controller.
"""

import logging
import os
import sys
import traceback
from typing import Any, List, Optional

# Allow running this file directly from a source checkout
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SRC_DIR = os.path.dirname(BASE_DIR)
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Log unhandled exceptions and print the trace to stderr.

    Args:
        exctype: Exception class.
        value: Exception instance.
        tb: Traceback object.
    """
    if issubclass(exctype, KeyboardInterrupt):
        sys.__excepthook__(exctype, value, tb)
        return

    stack_trace = "".join(traceback.format_exception(exctype, value, tb))

    logger = logging.getLogger("doctoc_watch.supervisor")
    logger.critical(f"FATAL EXCEPTION DETECTED: {value}")

    print("\n" + "=" * 80, file=sys.stderr)
    print("CRITICAL ERROR (DOCTOC-WATCH)", file=sys.stderr)
    print("=" * 80, file=sys.stderr)
    print(stack_trace, file=sys.stderr)


sys.excepthook = global_exception_handler


# -----------------------------------------------------------------------------
# EXECUTION ROUTING
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI, routing unexpected failures through the supervisor.

    Returns:
        int: Standard process exit code.
    """
    from doctoc_watch.interface.cli.app import main as cli_main

    try:
        return cli_main(argv)
    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
