from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command line schema and translates the parsed namespace into
configuration overrides understood by the domain layer.
"""

import argparse
from typing import Any, Dict

from treedigest.domain.constants import APP_NAME, SUPPORTED_ALGORITHMS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the treedigest CLI.

    The path is optional at the parser level so that a missing path is
    reported by the application with its own exit status.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Compute a deterministic Merkle-style digest of a file or "
            "directory tree."
        ),
    )

    p.add_argument(
        "input_path",
        nargs="?",
        default=None,
        metavar="PATH",
        help="File or directory to hash.",
    )

    # --- Hashing ---
    p.add_argument(
        "-a", "--algorithm",
        choices=list(SUPPORTED_ALGORITHMS),
        default=None,
        help="Hash primitive (default: blake3).",
    )
    p.add_argument(
        "-j", "--workers",
        type=int,
        default=None,
        help="Threads used to hash files. 1 keeps the traversal sequential.",
    )
    p.add_argument(
        "--chunk-size",
        dest="chunk_size",
        type=int,
        default=None,
        help="Read size in bytes when streaming file content.",
    )

    # --- Traversal Policy ---
    p.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Treat symbolic links below the root as unsupported entries.",
    )
    p.add_argument(
        "--no-cycle-check",
        action="store_true",
        help="Disable detection of directories that loop back to an ancestor.",
    )
    p.add_argument(
        "--canonical",
        action="store_true",
        help="Hash the absolute resolved root path instead of PATH as typed.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log traversal summary (INFO).",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to a rotating file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the merged configuration as JSON and exit.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the full result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration overrides dict.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["input_path"] = args.input_path
    overrides["algorithm"] = args.algorithm
    overrides["workers"] = args.workers
    overrides["chunk_size"] = args.chunk_size
    overrides["log_file"] = args.log_file

    # Traversal policy
    if args.no_follow_symlinks:
        overrides["follow_symlinks"] = False
    if args.no_cycle_check:
        overrides["detect_cycles"] = False
    if args.canonical:
        overrides["canonicalize_root"] = True

    # Diagnostics
    if args.debug:
        overrides["log_level"] = "DEBUG"
    elif args.verbose:
        overrides["log_level"] = "INFO"

    if args.json_output:
        overrides["json_output"] = True

    return overrides
