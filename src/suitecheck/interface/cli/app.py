from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, resolution of settings
(defaults, settings file, command-line overrides), loading the declared
hierarchy, running the check and rendering the result.

Exit codes: 0 consistent, 1 completeness violation or unexpected failure,
2 configuration error.
"""

import json
import os
import sys
from typing import List, Optional

from suitecheck.core.components.filters import ExclusionSet, compile_pattern
from suitecheck.core.pipeline.checker import check_all
from suitecheck.core.pipeline.report import render_report
from suitecheck.core.pipeline.validator import validate_config
from suitecheck.core.services.declaration import load_declaration
from suitecheck.domain.config import get_default_config, load_config_file, merge_config
from suitecheck.domain.errors import DeclarationError, InvalidPattern
from suitecheck.infra.logging import LoggingConfig, configure_logging, get_logger
from suitecheck.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_VIOLATION = 1
EXIT_CONFIG_ERROR = 2

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
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Resolve settings: defaults < settings file < command line
    base_conf = get_default_config()
    if args.config_file:
        try:
            base_conf = merge_config(base_conf, load_config_file(args.config_file))
        except (OSError, ValueError) as e:
            return _config_error(f"Cannot load settings file '{args.config_file}': {e}")

    raw_conf = merge_config(base_conf, cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight verification
    if not conf["declaration_path"]:
        return _config_error("No declaration file given (use -d/--declaration).")

    root_dir = conf["root_dir"]
    if not os.path.isdir(root_dir):
        return _config_error(f"Root directory does not exist: {root_dir}")

    try:
        pattern = compile_pattern(conf["pattern"])
        exclusions = ExclusionSet(conf["exclusions"], conf["excluded_pattern"] or None)
        tree = load_declaration(conf["declaration_path"])
    except (InvalidPattern, DeclarationError) as e:
        return _config_error(str(e))

    # 5. Check execution phase
    logger.debug(f"Checking {len(tree)} categories under {root_dir}")
    try:
        result = check_all(
            tree,
            root_dir,
            pattern,
            exclusions,
            marker_files=conf["marker_files"],
            recursive=conf["recursive"],
            excluded_dirs=conf["excluded_dirs"],
            jobs=conf["jobs"],
        )
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as e:
        logger.critical(f"Check failed unexpectedly: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_VIOLATION

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(render_report(result, pattern))

    return EXIT_OK if result.ok else EXIT_VIOLATION

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _config_error(msg: str) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
