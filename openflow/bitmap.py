"""Bitmaps of reasons and types used in configuration messages."""

from __future__ import annotations

from collections.abc import Iterable

_UINT32_MASK = 0xFFFFFFFF


def bitmap64(q1: int, q2: int) -> tuple[int, int]:
    """Combine two 32-bit quartets into a 64-bit bitmap."""
    return (q1, q2)


def bitmap128(q1: int, q2: int, q3: int, q4: int) -> tuple[int, int, int, int]:
    """Combine four 32-bit quartets into a 128-bit bitmap."""
    return (q1, q2, q3, q4)


def _bits(values: Iterable[int]) -> int:
    bits = 0
    for value in values:
        bits = (bits | (1 << int(value))) & _UINT32_MASK
    return bits


def packet_in_reason_bitmap(*args: int) -> int:
    """Return the 32-bit bitmap of the given packet-in reasons."""
    return _bits(args)


def port_reason_bitmap(*args: int) -> int:
    """Return the 32-bit bitmap of the given port reasons."""
    return _bits(args)


def flow_reason_bitmap(*args: int) -> int:
    """Return the 32-bit bitmap of the given flow-removed reasons."""
    return _bits(args)


def group_bitmap(*args: int) -> int:
    """Return the 32-bit bitmap of the given group types."""
    return _bits(args)


def action_bitmap(*args: int) -> int:
    """Return the 32-bit bitmap of the given action types."""
    return _bits(args)