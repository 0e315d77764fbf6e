"""
TriAlign v0.1.0

Residue scoring for edit-graph construction.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .blosum62 import (
    ALPHABET,
    BLOSUM62,
    GAP_CHAR,
    InvalidResidueError,
    gap_cost,
    invalid_residues,
    score,
    sum_of_pairs_weight,
)

__all__ = [
    "ALPHABET",
    "BLOSUM62",
    "GAP_CHAR",
    "InvalidResidueError",
    "gap_cost",
    "invalid_residues",
    "score",
    "sum_of_pairs_weight",
]
