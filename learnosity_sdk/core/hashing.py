"""
learnosity_sdk/core/hashing.py

Canonical Hasher: the ONLY place signing strings are built and digested.

    signing_string = "_".join(values)
    digest         = lowercase hex SHA-256 of the UTF-8 signing string

Values are NOT escaped. A value containing "_" is indistinguishable from
two values; the remote verifier joins the same way, so this must not change.
"""

import hashlib
from typing import Any, Callable, Iterable

SEPARATOR = "_"

HashFunction = Callable[[bytes], Any]


def join_values(values: Iterable[str]) -> str:
    """Join signing values with the fixed separator."""
    return SEPARATOR.join(values)


def hash_value(value: str, hash_function: HashFunction = hashlib.sha256) -> str:
    """
    Hex digest of a single string.

    Returns:
        Lowercase hex-encoded digest (64 characters for SHA-256).
    """
    return hash_function(value.encode("utf-8")).hexdigest()


def hash_values(
    values:        Iterable[str],
    hash_function: HashFunction = hashlib.sha256,
) -> str:
    """Hex digest of the "_"-joined values, in the order given."""
    return hash_value(join_values(values), hash_function)
