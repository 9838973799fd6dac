"""Address values and inclusive address ranges as stored in a parameters document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

UINT64_MAX = 2**64 - 1


def _is_uint64(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is never an address
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= UINT64_MAX


def parse_address(value: Any) -> tuple[bool, Optional[int]]:
    """
    Read an address from a document value.

    Returns (ok, address). None is an explicit "not set" and is accepted.
    Integers and "0x..." / decimal strings are accepted when they fit in 64 bits.
    Anything else gives ok=False so the caller can keep its current value.
    """
    if value is None:
        return True, None
    if _is_uint64(value):
        return True, value
    if isinstance(value, str):
        text = value.strip().lower()
        try:
            number = int(text, 16) if text.startswith("0x") else int(text, 10)
        except ValueError:
            return False, None
        if _is_uint64(number):
            return True, number
    return False, None


def format_address(address: Optional[int]) -> str:
    """Hex form for log messages; 'undefined' when unset."""
    if address is None:
        return "undefined"
    return f"0x{address:x}"


@dataclass(frozen=True)
class AddressRange:
    """Inclusive range [start, end]. Either end may be unset."""

    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def is_defined(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, address: int) -> bool:
        if not self.is_defined:
            return False
        return self.start <= address <= self.end

    @property
    def size(self) -> int:
        """Number of addresses covered; 0 when undefined or inverted."""
        if not self.is_defined or self.end < self.start:
            return 0
        return self.end - self.start + 1

    def __str__(self) -> str:
        return f"<{format_address(self.start)}, {format_address(self.end)}>"


def parse_range(value: Any) -> Optional[AddressRange]:
    """Read {"start": a, "end": b} or [a, b]; None when malformed."""
    if isinstance(value, dict):
        if "start" not in value or "end" not in value:
            return None
        raw_start, raw_end = value["start"], value["end"]
    elif isinstance(value, list) and len(value) == 2:
        raw_start, raw_end = value
    else:
        return None
    ok_start, start = parse_address(raw_start)
    ok_end, end = parse_address(raw_end)
    if not (ok_start and ok_end):
        return None
    return AddressRange(start, end)


def range_to_document(address_range: AddressRange) -> dict[str, Optional[int]]:
    return {
        "start": address_range.start,
        "end": address_range.end,
    }
