from __future__ import annotations

"""
Configuration Validation Service.

Sits between the interface layer and the hashing core. Every key of the
runtime configuration is passed through a coercer from ``_SCHEMA``; values
that need correcting are replaced and the correction is reported as a
warning, or raised when ``strict`` is set.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from treedigest.domain.config import get_default_config
from treedigest.domain.constants import DEFAULT_ALGORITHM, SUPPORTED_ALGORITHMS

logger = logging.getLogger(__name__)

_TRUE_WORDS = ("true", "1", "yes", "y", "on")
_FALSE_WORDS = ("false", "0", "no", "n", "off")

# A coercer receives (value, default, field, warnings, strict)
Coercer = Callable[[Any, Any, str, List[str], bool], Any]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Normalize a raw configuration dictionary.

    Missing keys take their defaults, unknown keys are carried over as is.

    Args:
        config: Raw configuration, typically a dict built from CLI flags.
        strict: Raise ``TypeError``/``ValueError`` instead of correcting.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The clean configuration and the
                                          corrections that were applied.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        problem = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(problem)
        logger.warning(problem)
        warnings.append(f"{problem} Using defaults.")
        return defaults, warnings

    clean: Dict[str, Any] = {**defaults, **config}
    for key, coerce in _SCHEMA.items():
        clean[key] = coerce(clean.get(key), defaults[key], key, warnings, strict)

    return clean, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: COERCERS
# -----------------------------------------------------------------------------

def _reject(problem: str, error_cls: Type[Exception], warnings: List[str], strict: bool) -> None:
    """Raise in strict mode, otherwise record the fallback."""
    if strict:
        raise error_cls(problem)
    warnings.append(f"{problem} Using fallback.")


def _type_problem(field: str, wanted: str, value: Any) -> str:
    return f"Invalid field '{field}': expected {wanted}, received {type(value).__name__}."


def _path_str(value: Any, default: str, field: str, warnings: List[str], strict: bool) -> str:
    """Paths are hashed literally, so surrounding blanks are kept."""
    if value is None:
        return default
    if isinstance(value, str):
        return value
    _reject(_type_problem(field, "str", value), TypeError, warnings, strict)
    return default


def _name_str(value: Any, default: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip() or default
    _reject(_type_problem(field, "str", value), TypeError, warnings, strict)
    return default


def _optional_str(
        value: Any, default: Optional[str], field: str, warnings: List[str], strict: bool
) -> Optional[str]:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip() or None
    _reject(_type_problem(field, "str", value), TypeError, warnings, strict)
    return default


def _flag(value: Any, default: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Accept real booleans; loosely typed ones (0/1, 'yes', 'off') outside strict mode."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS or word in _FALSE_WORDS:
                parsed = word in _TRUE_WORDS
                warnings.append(f"Field '{field}' converted from '{value}' to {parsed}.")
                return parsed

    _reject(_type_problem(field, "bool", value), TypeError, warnings, strict)
    return default


def _positive_int(value: Any, default: int, field: str, warnings: List[str], strict: bool) -> int:
    if value is None:
        return default

    number: Optional[int] = None
    # bool is an int subclass but never a valid size
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, str) and not strict:
        try:
            number = int(value.strip())
        except ValueError:
            number = None
        else:
            warnings.append(f"Field '{field}' converted from '{value}' to {number}.")

    if number is None:
        _reject(_type_problem(field, "int", value), TypeError, warnings, strict)
        return default

    if number < 1:
        _reject(f"Invalid field '{field}': must be >= 1, received {number}.",
                ValueError, warnings, strict)
        return default

    return number


def _algorithm(value: Any, default: str, field: str, warnings: List[str], strict: bool) -> str:
    """Case and dashes are ignored: 'SHA-256' selects sha256."""
    name = _name_str(value, default, field, warnings, strict)
    key = name.lower().replace("-", "")
    if key in SUPPORTED_ALGORITHMS:
        return key

    problem = f"Unsupported algorithm '{name}'. Supported: {', '.join(SUPPORTED_ALGORITHMS)}."
    if strict:
        raise ValueError(problem)
    warnings.append(f"{problem} Using '{DEFAULT_ALGORITHM}'.")
    return DEFAULT_ALGORITHM


# -----------------------------------------------------------------------------
# SCHEMA
# -----------------------------------------------------------------------------

_SCHEMA: Dict[str, Coercer] = {
    "input_path": _path_str,
    "algorithm": _algorithm,
    "chunk_size": _positive_int,
    "workers": _positive_int,
    "follow_symlinks": _flag,
    "detect_cycles": _flag,
    "canonicalize_root": _flag,
    "json_output": _flag,
    "log_level": _name_str,
    "log_file": _optional_str,
}
