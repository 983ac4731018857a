# tests/matcher/test_keys.py
import itertools

import pytest

from matcher.keys import (
    GOLDEN_RATIO,
    KEY_MASK,
    combine_key_uniquely,
    combine_keys_loosely,
    combine_keys_uniquely,
    hash_string,
)

SAMPLE_KEYS = [hash_string(s) for s in ("root", "child", "x", "1", "")]


# --- hash_string ---

def test_hash_string_matches_fnv1a_reference_values():
    """Bekende FNV-1a (64-bit) testvectoren."""
    assert hash_string("") == 0xCBF29CE484222325
    assert hash_string("a") == 0xAF63DC4C8601EC8C
    assert hash_string("foobar") == 0x85944171F73967E8


def test_hash_string_is_deterministic_and_fits_in_64_bits():
    assert hash_string("élément") == hash_string("élément")
    assert 0 <= hash_string("élément") <= KEY_MASK


def test_hash_string_distinguishes_similar_strings():
    assert hash_string("ab") != hash_string("ba")
    assert hash_string("a") != hash_string("a ")


# --- combine_keys_uniquely ---

def test_first_step_from_zero_adds_the_golden_ratio():
    """Vanaf seed 0 is de eerste stap simpelweg key + GOLDEN_RATIO."""
    assert combine_keys_uniquely(0) == GOLDEN_RATIO
    assert combine_keys_uniquely(5) == 5 + GOLDEN_RATIO


def test_no_contributions_returns_the_seed():
    assert combine_keys_uniquely() == 0
    assert combine_keys_uniquely(seed=42) == 42


def test_unique_combine_is_order_sensitive():
    a, b = hash_string("x"), hash_string("1")
    assert combine_keys_uniquely(a, b) != combine_keys_uniquely(b, a)


def test_unique_combine_is_order_sensitive_for_every_permutation():
    """Alle permutaties van vier verschillende keys geven verschillende resultaten."""
    keys = SAMPLE_KEYS[:4]
    results = {combine_keys_uniquely(*perm) for perm in itertools.permutations(keys)}
    assert len(results) == 24


def test_incremental_fold_equals_batch_fold():
    a, b, c, d = SAMPLE_KEYS[:4]
    batch = combine_keys_uniquely(a, b, c, d)

    accumulator = 0
    for key in (a, b, c, d):
        accumulator = combine_key_uniquely(accumulator, key)
    assert accumulator == batch

    partial = combine_keys_uniquely(a, b)
    assert combine_keys_uniquely(c, d, seed=partial) == batch


def test_unique_combine_stays_within_key_width():
    result = combine_keys_uniquely(KEY_MASK, KEY_MASK, KEY_MASK, seed=KEY_MASK)
    assert 0 <= result <= KEY_MASK


def test_unique_combine_hashes_string_contributions():
    assert combine_keys_uniquely("x", "1") == combine_keys_uniquely(hash_string("x"), hash_string("1"))


def test_unique_combine_rejects_unsupported_types():
    with pytest.raises(TypeError):
        combine_keys_uniquely(1.5)
    with pytest.raises(TypeError):
        combine_keys_uniquely(None)


# --- combine_keys_loosely ---

def test_loose_combine_of_nothing_is_zero():
    assert combine_keys_loosely() == 0


def test_loose_combine_is_permutation_invariant():
    expected = combine_keys_loosely(*SAMPLE_KEYS)
    for perm in itertools.permutations(SAMPLE_KEYS):
        assert combine_keys_loosely(*perm) == expected


def test_loose_combine_is_associative():
    a, b, c = SAMPLE_KEYS[:3]
    assert combine_keys_loosely(combine_keys_loosely(a, b), c) == combine_keys_loosely(a, combine_keys_loosely(b, c))


def test_loose_combine_zero_is_identity():
    a = SAMPLE_KEYS[0]
    assert combine_keys_loosely(a, 0) == a


def test_loose_combine_cancels_equal_pairs():
    """XOR: twee gelijke keys heffen elkaar op."""
    a, b = SAMPLE_KEYS[:2]
    assert combine_keys_loosely(a, a) == 0
    assert combine_keys_loosely(a, b, a) == b
