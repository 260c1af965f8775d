from __future__ import annotations

"""
Tree Digest Service.

Coordinates one hashing run for the interface layer:
1. Validates and normalizes the configuration.
2. Checks that the target path exists.
3. Resolves the absolute path used for display.
4. Runs the tree hasher on the literal path string.
5. Wraps the outcome into a HashResult.
"""

import logging
from typing import Any, Dict, Optional

from treedigest.core.hashing.tree_hasher import TreeHasher
from treedigest.core.validator import validate_config
from treedigest.domain.config import HashConfig
from treedigest.domain.errors import TreeDigestError
from treedigest.domain.models import HashResult, create_error_result, create_success_result
from treedigest.infra.fs import path_exists, resolve_display_path

logger = logging.getLogger(__name__)


def run_hash(config: Optional[Dict[str, Any]]) -> HashResult:
    """
    Execute a complete hashing run.

    I/O failures and traversal errors never escape: they turn into an error
    result carrying no digest.

    Args:
        config: The configuration dictionary (raw or partial).

    Returns:
        HashResult: Status, digest and traversal statistics.
    """
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    path = cfg["input_path"]
    if not path:
        return create_error_result("No path supplied.", cfg, path)

    if not path_exists(path):
        msg = f"The provided path does not exist: {path}"
        logger.error(msg)
        return create_error_result(msg, cfg, path)

    display_path = resolve_display_path(path)
    hasher = TreeHasher(HashConfig.from_dict(cfg))

    logger.debug(f"Hashing '{path}' with {cfg['algorithm']} (workers={cfg['workers']})")
    try:
        node = hasher.hash(path)
    except (OSError, TreeDigestError) as e:
        logger.error(f"Hashing failed: {e}")
        return create_error_result(
            str(e), cfg, path, display_path, summary_extra=hasher.stats.as_dict()
        )

    return create_success_result(
        cfg, node.path, display_path, node, summary_extra=hasher.stats.as_dict()
    )
