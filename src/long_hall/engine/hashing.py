"""Deterministic hashing used to derive every random seed.

``hash_string`` is a djb2 variant that wraps to a signed 32-bit integer
after every step and walks the string in UTF-16 code units, so the
value for a given seed string is identical to the one stored in existing
saves. ``combine_hashes`` folds several hashes with XOR followed by a
multiply-by-33 mix so that equal inputs do not simply cancel.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def to_int32(value: int) -> int:
    """Wrap an arbitrary integer to the signed 32-bit range."""
    value &= _INT32_MASK
    return value - 0x100000000 if value & _INT32_SIGN else value


def _utf16_units(text: str) -> list[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


def hash_string(text: str) -> int:
    """Hash a string to a signed 32-bit integer (djb2).

    Args:
        text: Input string.

    Returns:
        Signed 32-bit hash.

    Example:
        >>> hash_string("")
        5381
        >>> hash_string("a")
        177670
    """
    value = 5381
    for unit in _utf16_units(text):
        value = to_int32((to_int32(value << 5)) + value + unit)
    return value


def combine_hashes(*hashes: int) -> int:
    """Combine hash values into one signed 32-bit integer.

    Returns 0 when called with no arguments and the input unchanged when
    called with a single hash.
    """
    if not hashes:
        return 0

    combined = to_int32(hashes[0])
    for value in hashes[1:]:
        combined = to_int32(combined ^ to_int32(value))
        combined = to_int32((combined << 5) + combined)
    return combined


def hash_with_seed(text: str, seed: int) -> int:
    """Hash a string together with a numeric seed."""
    return combine_hashes(hash_string(text), seed)


def canonical_json(obj: Any) -> str:
    """Serialize ``obj`` the compact way browsers do (no spaces, key order kept)."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def hash_object(obj: Any) -> int:
    """Hash a JSON-compatible object through its compact JSON form.

    ``None`` hashes as the JSON literal ``null``.
    """
    return hash_string(canonical_json(obj))


def sha256_digest(obj: Any) -> str:
    """Hex sha256 of an object's compact JSON form, used for save integrity."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()


__all__ = [
    "to_int32",
    "hash_string",
    "combine_hashes",
    "hash_with_seed",
    "canonical_json",
    "hash_object",
    "sha256_digest",
]
