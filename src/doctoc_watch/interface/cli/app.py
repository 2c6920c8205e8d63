from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, config file, CLI overrides), pre-flight checks and the routing
between a single render pass and the watch loop.
"""

import json
import os
import sys
from typing import List, Optional

from doctoc_watch.core.pipeline.engine import RenderEngine
from doctoc_watch.core.pipeline.validator import validate_config
from doctoc_watch.core.services.watcher import TreeWatcher
from doctoc_watch.domain.config import (
    WatchConfig,
    get_default_config,
    load_config_file,
    merge_config,
)
from doctoc_watch.domain.errors import DoctocWatchError
from doctoc_watch.infra.logging import LoggingConfig, configure_logging, get_logger
from doctoc_watch.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 1. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 2. Configuration hierarchy: defaults < config file < CLI flags
    raw_conf = merge_config(get_default_config(), load_config_file(args.config_file))
    raw_conf = merge_config(raw_conf, cli_args.args_to_overrides(args))

    cfg, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(cfg.to_dict(), ensure_ascii=False, indent=2))
        return EXIT_OK

    # 3. Pre-flight checks
    if not os.path.isfile(cfg.target):
        logger.error(f"Target file does not exist: {cfg.target}")
        return EXIT_USAGE

    if cfg.verbose:
        _log_options(cfg)

    # 4. Execution
    watcher = TreeWatcher(cfg.list_files, cfg.working_dir, cfg.interval, track=[cfg.target])
    engine = RenderEngine(cfg)

    try:
        watcher.start()
    except (DoctocWatchError, OSError) as e:
        logger.critical(f"Could not start watching: {e}")
        return EXIT_FAILURE

    if cfg.run_once:
        return run_once(engine, watcher)

    try:
        watcher.run(lambda events: engine.handle_events(events, watcher))
    except KeyboardInterrupt:
        logger.info("Stopped.")
        return EXIT_INTERRUPTED

    return EXIT_OK


def run_once(engine: RenderEngine, watcher: TreeWatcher) -> int:
    """Render a single time and report the outcome as an exit code."""
    result = engine.render(watcher.watched())
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _log_options(cfg: WatchConfig) -> None:
    logger.info(f"Target: {json.dumps(cfg.target)}")
    logger.info(f"Target Header: {json.dumps(cfg.target_header)}")
    logger.info(f"Lists Files: {json.dumps(cfg.list_files)}")
    logger.info(f"List Files Header: {json.dumps(cfg.list_files_header)}")
    if cfg.run_once:
        logger.info("Running once without watch")
    logger.info("-------- Running --------")


if __name__ == "__main__":
    sys.exit(main())
