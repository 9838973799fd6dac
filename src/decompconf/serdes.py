"""Permissive JSON document primitives: read a typed value or fall back to a default, never raise."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Iterable, Optional, TypeVar

from decompconf.address import AddressRange, parse_address, parse_range

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


def _lookup(doc: Any, key: str) -> Any:
    if not isinstance(doc, dict):
        return _MISSING
    return doc.get(key, _MISSING)


def read_or_default(
    doc: Any,
    key: str,
    default: T,
    convert: Callable[[Any], tuple[bool, T]],
) -> T:
    """
    Return convert(doc[key]) when the key is present and convertible, else default.

    convert returns (ok, value). Every typed reader below goes through here so
    absent keys and type mismatches are handled the same way everywhere.
    """
    raw = _lookup(doc, key)
    if raw is _MISSING:
        return default
    ok, value = convert(raw)
    if not ok:
        logger.debug("Ignoring %r: unexpected value %r", key, raw)
        return default
    return value


def _as_bool(raw: Any) -> tuple[bool, bool]:
    if isinstance(raw, bool):
        return True, raw
    return False, False


def _as_string(raw: Any) -> tuple[bool, str]:
    if isinstance(raw, str):
        return True, raw
    return False, ""


def _as_string_list(raw: Any) -> tuple[bool, list[str]]:
    if not isinstance(raw, list):
        return False, []
    return True, [item for item in raw if isinstance(item, str)]


def _as_range_list(raw: Any) -> tuple[bool, list[AddressRange]]:
    if not isinstance(raw, list):
        return False, []
    ranges = []
    for item in raw:
        parsed = parse_range(item)
        if parsed is None:
            logger.debug("Skipping malformed address range %r", item)
            continue
        ranges.append(parsed)
    return True, ranges


def read_bool(doc: Any, key: str, default: bool = False) -> bool:
    return read_or_default(doc, key, default, _as_bool)


def read_string(doc: Any, key: str, default: str = "") -> str:
    return read_or_default(doc, key, default, _as_string)


def read_address(doc: Any, key: str, default: Optional[int] = None) -> Optional[int]:
    """Address or null; null is an explicit unset and overrides default."""
    return read_or_default(doc, key, default, parse_address)


def read_string_list(doc: Any, key: str, default: Optional[list[str]] = None) -> Optional[list[str]]:
    """String elements of a JSON array, in document order. Non-strings are dropped."""
    return read_or_default(doc, key, default, _as_string_list)


def read_range_list(
    doc: Any, key: str, default: Optional[list[AddressRange]] = None
) -> Optional[list[AddressRange]]:
    return read_or_default(doc, key, default, _as_range_list)


def string_list(values: Iterable[str]) -> list[str]:
    """Deterministic list form of a set of strings (sorted)."""
    return sorted(values)


def dump_document(doc: dict[str, Any], pretty: bool = True) -> str:
    if pretty:
        return json.dumps(doc, indent=2)
    return json.dumps(doc, separators=(",", ":"))


def load_document(text: str) -> Any:
    """Parse JSON text; None when malformed."""
    try:
        return json.loads(text)
    except (TypeError, ValueError, RecursionError):
        logger.debug("Document is not valid JSON")
        return None
