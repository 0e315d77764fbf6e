"""
TriAlign v0.1.0

Sequence utility functions for TriAlign.

Per-sequence statistics reported alongside an alignment.
"""

from collections import Counter
from typing import Dict


def residue_counts(sequence: str) -> Dict[str, int]:
    """
    Count each residue in a sequence.

    Args:
        sequence: Residue string

    Returns:
        Dict of residue -> count, ordered by residue

    Example:
        >>> residue_counts("GATTACA")
        {'A': 3, 'C': 1, 'G': 1, 'T': 2}
    """
    counts = Counter(sequence.upper())
    return {residue: counts[residue] for residue in sorted(counts)}


__all__ = [
    'residue_counts',
]
