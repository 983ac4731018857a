"""
keys.py: key combinators

Fingerprints are 64-bit unsigned integers. Two primitives merge them:

  - combine_keys_uniquely: order-sensitive fold (boost-style hash_combine):
        a = a XOR (hash(c) + GOLDEN_RATIO + (a << 6) + (a >> 2))
  - combine_keys_loosely: XOR-reduction, invariant to argument order.

Strings are hashed with 64-bit FNV-1a so that keys are stable across
processes (the builtin `hash()` is salted per interpreter run).
"""

from __future__ import annotations

from functools import lru_cache, reduce
from operator import xor
from typing import Union

Key = int

KEY_BITS = 64
KEY_MASK = (1 << KEY_BITS) - 1

# Odd constant; keeps the first step away from a zero fixed point.
GOLDEN_RATIO = 0x9E3779B9

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3


@lru_cache(maxsize=65_536)
def hash_string(value: str) -> Key:
    """64-bit FNV-1a over the UTF-8 bytes of `value`."""
    result = FNV_OFFSET_BASIS
    for byte in value.encode("utf-8", errors="surrogatepass"):
        result ^= byte
        result = (result * FNV_PRIME) & KEY_MASK
    return result


def _contribution_hash(key: Union[Key, str]) -> Key:
    # Integer keys hash to themselves, like std::hash<size_t>.
    if isinstance(key, str):
        return hash_string(key)
    if isinstance(key, int):
        return key & KEY_MASK
    raise TypeError(f"Cannot combine a key of type {type(key).__name__}; expected int or str.")


def combine_key_uniquely(accumulator: Key, key: Union[Key, str]) -> Key:
    """Folds a single contribution into `accumulator` (one mixing step)."""
    mixed = (_contribution_hash(key) + GOLDEN_RATIO + (accumulator << 6) + (accumulator >> 2)) & KEY_MASK
    return accumulator ^ mixed


def combine_keys_uniquely(*keys: Union[Key, str], seed: Key = 0) -> Key:
    """
    Combines contributions so that the result depends on both their values and
    their positions.

    Folding one key at a time into an accumulator started at `seed` gives the
    same result as passing all keys at once:

        combine_keys_uniquely(a, b, c) == combine_keys_uniquely(c, seed=combine_keys_uniquely(a, b))
    """
    return reduce(combine_key_uniquely, keys, seed & KEY_MASK)


def combine_keys_loosely(*keys: Key) -> Key:
    """
    XOR-reduces keys. Commutative and associative; no keys gives 0.

    Note that equal keys cancel in pairs.
    """
    return reduce(xor, (_contribution_hash(k) for k in keys), 0)
