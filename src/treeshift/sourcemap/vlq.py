# topmark:header:start
#
#   project      : TreeShift
#   file         : vlq.py
#   file_relpath : src/treeshift/sourcemap/vlq.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base64 VLQ encoding used by the ``mappings`` field of version 3 source maps."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable

BASE64_ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

VLQ_BASE_SHIFT: Final[int] = 5
VLQ_BASE_MASK: Final[int] = (1 << VLQ_BASE_SHIFT) - 1
VLQ_CONTINUATION_BIT: Final[int] = 1 << VLQ_BASE_SHIFT


def encode(value: int) -> str:
    """Encode a signed integer as a base64 VLQ string.

    The sign is stored in the least significant bit, then the magnitude is
    emitted in 5-bit groups, least significant first, with bit 6 marking
    continuation.
    """
    vlq: int = ((-value) << 1) | 1 if value < 0 else value << 1
    out: list[str] = []
    while True:
        digit: int = vlq & VLQ_BASE_MASK
        vlq >>= VLQ_BASE_SHIFT
        if vlq:
            digit |= VLQ_CONTINUATION_BIT
        out.append(BASE64_ALPHABET[digit])
        if not vlq:
            return "".join(out)


def encode_segment(values: Iterable[int]) -> str:
    """Encode one mapping segment (a group of relative field values)."""
    return "".join(encode(v) for v in values)
