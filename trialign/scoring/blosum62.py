#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

BLOSUM62 scoring matrix for protein residues.

Stateless lookup module: pairwise substitution scores, the fixed gap cost and
the three-way sum-of-pairs weight used to score edit-graph columns.

    #   A  R  N  D  C  Q  E  G  H  I  L  K  M  F  P  S  T  W  Y  V
    A   4 -1 -2 -2  0 -1 -1  0 -2 -1 -1 -1 -1 -2 -1  1  0 -3 -2  0
    ...
    V   0 -3 -3 -3 -1 -2 -2 -3 -3  3  1 -2  1 -1 -2 -2  0 -3 -1  4

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from typing import Dict, List, Optional

import numpy as np


GAP_CHAR = '-'

# Row/column order of the matrix
ALPHABET = "ARNDCQEGHILKMFPSTWYV"

_GAP_COST = -6


def _frozen_matrix(rows) -> np.ndarray:
    matrix = np.array(rows, dtype=np.int64)
    matrix.setflags(write=False)
    return matrix


BLOSUM62 = _frozen_matrix([
    #  A   R   N   D   C   Q   E   G   H   I   L   K   M   F   P   S   T   W   Y   V
    [ 4, -1, -2, -2,  0, -1, -1,  0, -2, -1, -1, -1, -1, -2, -1,  1,  0, -3, -2,  0],  # A
    [-1,  5,  0, -2, -3,  1,  0, -2,  0, -3, -2,  2, -1, -3, -2, -1, -1, -3, -2, -3],  # R
    [-2,  0,  6,  1, -3,  0,  0,  0,  1, -3, -3,  0, -2, -3, -2,  1,  0, -4, -2, -3],  # N
    [-2, -2,  1,  6, -3,  0,  2, -1, -1, -3, -4, -1, -3, -3, -1,  0, -1, -4, -3, -3],  # D
    [ 0, -3, -3, -3,  9, -3, -4, -3, -3, -1, -1, -3, -1, -2, -3, -1, -1, -2, -2, -1],  # C
    [-1,  1,  0,  0, -3,  5,  2, -2,  0, -3, -2,  1,  0, -3, -1,  0, -1, -2, -1, -2],  # Q
    [-1,  0,  0,  2, -4,  2,  5, -2,  0, -3, -3,  1, -2, -3, -1,  0, -1, -3, -2, -2],  # E
    [ 0, -2,  0, -1, -3, -2, -2,  6, -2, -4, -4, -2, -3, -3, -2,  0, -2, -2, -3, -3],  # G
    [-2,  0,  1, -1, -3,  0,  0, -2,  8, -3, -3, -1, -2, -1, -2, -1, -2, -2,  2, -3],  # H
    [-1, -3, -3, -3, -1, -3, -3, -4, -3,  4,  2, -3,  1,  0, -3, -2, -1, -3, -1,  3],  # I
    [-1, -2, -3, -4, -1, -2, -3, -4, -3,  2,  4, -2,  2,  0, -3, -2, -1, -2, -1,  1],  # L
    [-1,  2,  0, -1, -3,  1,  1, -2, -1, -3, -2,  5, -1, -3, -1,  0, -1, -3, -2, -2],  # K
    [-1, -1, -2, -3, -1,  0, -2, -3, -2,  1,  2, -1,  5,  0, -2, -1, -1, -1, -1,  1],  # M
    [-2, -3, -3, -3, -2, -3, -3, -3, -1,  0,  0, -3,  0,  6, -4, -2, -2,  1,  3, -1],  # F
    [-1, -2, -2, -1, -3, -1, -1, -2, -2, -3, -3, -1, -2, -4,  7, -1, -1, -4, -3, -2],  # P
    [ 1, -1,  1,  0, -1,  0,  0,  0, -1, -2, -2,  0, -1, -2, -1,  4,  1, -3, -2, -2],  # S
    [ 0, -1,  0, -1, -1, -1, -1, -2, -2, -1, -1, -1, -1, -2, -1,  1,  5, -2, -2,  0],  # T
    [-3, -3, -4, -4, -2, -2, -3, -2, -2, -3, -2, -3, -1,  1, -4, -3, -2, 11,  2, -3],  # W
    [-2, -2, -2, -3, -2, -1, -2, -3,  2, -1, -1, -2, -1,  3, -3, -2, -2,  2,  7, -1],  # Y
    [ 0, -3, -3, -3, -1, -2, -2, -3, -3,  3,  1, -2,  1, -1, -2, -2,  0, -3, -1,  4],  # V
])

RESIDUE_INDEX: Dict[str, int] = {residue: i for i, residue in enumerate(ALPHABET)}


class InvalidResidueError(ValueError):
    """
    Raised when symbols outside the BLOSUM62 alphabet reach scoring.

    Attributes:
        residue: First offending symbol
        residues: Every offending symbol, in order of first appearance
        source: Where the symbols came from (e.g. "sequence 2"), if known
    """

    def __init__(self, *residues: str, source: Optional[str] = None):
        self.residues = list(residues)
        self.residue = residues[0]
        self.source = source

        listed = ", ".join(repr(r) for r in residues)
        noun = "residue" if len(residues) == 1 else "residues"
        prefix = f"{source}: " if source else ""
        super().__init__(
            f"{prefix}Invalid {noun} {listed}: expected one of {ALPHABET}"
        )


def residue_index(residue: str) -> int:
    """Return the matrix row/column for a residue."""
    try:
        return RESIDUE_INDEX[residue]
    except KeyError:
        raise InvalidResidueError(residue) from None


def gap_cost() -> int:
    """Score for aligning a residue against a gap."""
    return _GAP_COST


def score(residue1: str, residue2: str) -> int:
    """
    Score for aligning two symbols.

    Returns:
        - the matrix entry if both symbols are residues
        - the gap cost if exactly one of them is the gap character
        - 0 if both are gap characters

    Raises:
        InvalidResidueError: If a symbol is neither a residue nor the gap
    """
    if residue1 != GAP_CHAR and residue2 != GAP_CHAR:
        return int(BLOSUM62[residue_index(residue1), residue_index(residue2)])

    if residue1 != GAP_CHAR:
        residue_index(residue1)
        return gap_cost()
    if residue2 != GAP_CHAR:
        residue_index(residue2)
        return gap_cost()

    return 0


def sum_of_pairs_weight(residue1: str, residue2: str, residue3: str) -> int:
    """
    Sum-of-pairs score for a three-symbol alignment column.

    Sums the scores of the three unordered pairs
    (residue1, residue2), (residue2, residue3) and (residue1, residue3).
    """
    return (
        score(residue1, residue2)
        + score(residue2, residue3)
        + score(residue1, residue3)
    )


def invalid_residues(sequence: str) -> List[str]:
    """
    Distinct symbols of an ungapped sequence that BLOSUM62 cannot score,
    in order of first appearance. The gap character counts as invalid.

    Example:
        >>> invalid_residues("AXBXZ")
        ['X', 'B', 'Z']
    """
    seen: List[str] = []
    for residue in sequence:
        if residue not in RESIDUE_INDEX and residue not in seen:
            seen.append(residue)
    return seen


__all__ = [
    'ALPHABET',
    'BLOSUM62',
    'GAP_CHAR',
    'InvalidResidueError',
    'gap_cost',
    'invalid_residues',
    'residue_index',
    'score',
    'sum_of_pairs_weight',
]
