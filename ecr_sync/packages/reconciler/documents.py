"""Local policy documents and their comparison with remote ones."""

import json
from pathlib import Path
from typing import Any

import structlog

logger = structlog.stdlib.get_logger(__name__)


def read_policy_document(path: Path) -> str:
    """Read a policy document as UTF-8 text. Errors propagate unchanged."""
    text = Path(path).read_text(encoding="utf-8")
    logger.debug("Read policy document", path=str(path), size=len(text))
    return text


def _reject_constant(name: str):
    raise ValueError(f"invalid JSON constant {name}")


def parse_policy_document(text: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON
    return json.loads(text, parse_constant=_reject_constant)


def _is_number(value: Any) -> bool:
    # bool is a subclass of int, but true is not the number 1 in JSON
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def documents_equal(a: Any, b: Any) -> bool:
    """Deep structural equality of two parsed JSON values.

    Object key order is ignored, array order is not. Numbers compare by value
    so ``1`` and ``1.0`` are equal, and booleans never equal numbers.
    """
    if _is_number(a) and _is_number(b):
        return a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(documents_equal(a[key], b[key]) for key in a)
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return False
        return all(documents_equal(x, y) for x, y in zip(a, b))
    if type(a) is not type(b):
        return False
    return a == b
