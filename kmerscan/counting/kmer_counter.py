#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
KmerScan v0.1.0

K-mer counting for a single sequence.

A window of k bytes slides over the sequence one position at a time. Every
window made only of ASCII bytes is counted under its exact byte content;
windows touching any byte >= 0x80 are skipped and the scan carries on past
them. Tables are plain dicts that iterate in first-occurrence order.

Author: KmerScan Development Team
License: MIT - See LICENSE
"""

from collections import Counter
from typing import Dict, Union

from ..errors import InvalidConfigurationError

SequenceLike = Union[bytes, bytearray, memoryview, str]

ASCII_LIMIT = 0x80


def validate_k(k: int) -> int:
    """
    Check that k is a positive integer.

    Args:
        k: K-mer size

    Returns:
        k, unchanged

    Raises:
        InvalidConfigurationError: If k is not a positive integer
    """
    if isinstance(k, bool) or not isinstance(k, int):
        raise InvalidConfigurationError(
            f"k must be a positive integer, got {k!r}", parameter="k"
        )
    if k <= 0:
        raise InvalidConfigurationError(f"k must be >= 1, got {k}", parameter="k")
    return k


def validate_threshold(threshold: int) -> int:
    """
    Check that threshold is a non-negative integer.

    Raises:
        InvalidConfigurationError: If threshold is negative or not an integer
    """
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise InvalidConfigurationError(
            f"threshold must be a non-negative integer, got {threshold!r}",
            parameter="threshold"
        )
    if threshold < 0:
        raise InvalidConfigurationError(
            f"threshold must be >= 0, got {threshold}", parameter="threshold"
        )
    return threshold


def _as_bytes(sequence: SequenceLike) -> bytes:
    if isinstance(sequence, str):
        return sequence.encode("utf-8")
    return bytes(sequence)


def count_kmers(sequence: SequenceLike, k: int) -> Dict[bytes, int]:
    """
    Count every overlapping k-mer of a sequence.

    Args:
        sequence: Sequence bytes (a str is encoded as UTF-8 first)
        k: K-mer size, >= 1

    Returns:
        Dict mapping each k-mer (bytes of length k) to its count, in order of
        first occurrence. Empty if the sequence is shorter than k.

    Raises:
        InvalidConfigurationError: If k is not a positive integer

    Example:
        >>> count_kmers(b"ACGTACGT", 3)
        {b'ACG': 2, b'CGT': 2, b'GTA': 1, b'TAC': 1}
    """
    validate_k(k)
    sequence = _as_bytes(sequence)
    length = len(sequence)

    if length < k:
        return {}

    if sequence.isascii():
        return dict(Counter(sequence[i:i + k] for i in range(length - k + 1)))

    counts: Dict[bytes, int] = {}
    # first window start that does not cover a non-ASCII byte seen so far
    clean_from = 0

    for end, byte in enumerate(sequence):
        if byte >= ASCII_LIMIT:
            clean_from = end + 1
            continue
        start = end - k + 1
        if start < clean_from:
            continue
        kmer = sequence[start:end + 1]
        counts[kmer] = counts.get(kmer, 0) + 1

    return counts


def filter_kmers(counts: Dict[bytes, int], threshold: int) -> Dict[bytes, int]:
    """
    Keep the k-mers whose count is at least threshold.

    Args:
        counts: Frequency table from count_kmers
        threshold: Minimum count to keep, >= 0

    Returns:
        New dict with the surviving entries, in the input's iteration order
    """
    validate_threshold(threshold)
    return {kmer: count for kmer, count in counts.items() if count >= threshold}


__all__ = [
    'count_kmers',
    'filter_kmers',
    'validate_k',
    'validate_threshold',
]

# KmerScan v0.1.0
# Any usage is subject to this software's license.
