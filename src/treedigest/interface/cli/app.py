from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, logging bootstrap,
configuration merging and validation, the hashing run, and result
rendering. Exit status: 0 on success, 1 on any failure, 130 on Ctrl-C.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from treedigest.core.service import run_hash
from treedigest.core.validator import validate_config
from treedigest.domain.config import get_default_config
from treedigest.domain.constants import EXIT_FAILURE, EXIT_INTERRUPTED, EXIT_OK
from treedigest.domain.errors import UsageError
from treedigest.domain.models import HashResult
from treedigest.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_logger,
    shutdown_logging,
)
from treedigest.interface.cli import args as cli_args

logger = get_logger(__name__)

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

    # 2. Merge command line overrides into defaults
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(get_default_config(), overrides)
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig.from_dict(clean_conf))
    try:
        for w in warnings:
            logger.warning(f"Configuration Constraint: {w}")

        if args.dump_config:
            print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
            return EXIT_OK

        # 4. Pre-flight: a path is mandatory
        try:
            _require_path(clean_conf)
        except UsageError as e:
            parser.print_usage(sys.stderr)
            print(f"{parser.prog}: error: {e}", file=sys.stderr)
            return EXIT_FAILURE

        # 5. Hashing phase
        try:
            result = run_hash(clean_conf)
        except KeyboardInterrupt:
            print("Interrupted by user.", file=sys.stderr)
            return EXIT_INTERRUPTED

        # 6. Output rendering phase
        if clean_conf.get("json_output"):
            print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
        else:
            _print_human_summary(result)

        return EXIT_OK if result.ok else EXIT_FAILURE
    finally:
        shutdown_logging()

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge override values into the base configuration.

    Only known keys are merged and None means "not given".

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in base:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# PRE-FLIGHT CHECKS
# -----------------------------------------------------------------------------

def _require_path(cfg: Dict[str, Any]) -> None:
    if not cfg.get("input_path"):
        raise UsageError("a file or directory path is required")

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: HashResult) -> None:
    """Print `<absolute_path>: <hex digest>` or the error on stderr."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(result.render_line())

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
