"""Tests for deterministic hashing."""

from __future__ import annotations

from long_hall.engine.hashing import (
    canonical_json,
    combine_hashes,
    hash_object,
    hash_string,
    hash_with_seed,
    sha256_digest,
    to_int32,
)


class TestHashString:
    """Tests for the djb2 string hash."""

    def test_known_values(self) -> None:
        """Test values fixed by existing saves."""
        assert hash_string("") == 5381
        assert hash_string("a") == 177670

    def test_wraps_to_signed_32_bits(self) -> None:
        """Test long strings stay in the signed 32-bit range."""
        value = hash_string("the long hall " * 50)
        assert -(2**31) <= value < 2**31

    def test_non_ascii_is_stable(self) -> None:
        """Test strings outside the BMP hash the same every time."""
        assert hash_string("🗡️ dungeon") == hash_string("🗡️ dungeon")
        assert hash_string("🗡️") != hash_string("")


class TestCombineHashes:
    """Tests for hash folding."""

    def test_empty_and_single(self) -> None:
        """Test the degenerate cases."""
        assert combine_hashes() == 0
        assert combine_hashes(12345) == 12345

    def test_two_values(self) -> None:
        """Test (100 ^ 200) * 33."""
        assert combine_hashes(100, 200) == 5676

    def test_equal_inputs_do_not_cancel_to_seed(self) -> None:
        """Test folding equal values is not the identity."""
        assert combine_hashes(7, 7, 7) != 7

    def test_hash_with_seed(self) -> None:
        """Test seeding is combining the string hash with the seed."""
        assert hash_with_seed("abc", 3) == combine_hashes(hash_string("abc"), 3)


class TestObjectHashing:
    """Tests for JSON based hashing."""

    def test_canonical_json_is_compact(self) -> None:
        """Test no whitespace and insertion order kept."""
        assert canonical_json({"b": 1, "a": [1, 2]}) == '{"b":1,"a":[1,2]}'

    def test_none_hashes_as_null(self) -> None:
        """Test None hashes like the literal null."""
        assert hash_object(None) == hash_string("null")

    def test_sha256_digest_changes_with_content(self) -> None:
        """Test the integrity digest tracks content."""
        digest = sha256_digest({"gold": 10})
        assert len(digest) == 64
        assert digest != sha256_digest({"gold": 11})

    def test_to_int32(self) -> None:
        """Test wrap-around at the sign bit."""
        assert to_int32(2**31) == -(2**31)
        assert to_int32(2**32 + 5) == 5
