#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Tests for the BLOSUM62 scoring module.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import numpy as np
import pytest

from trialign.scoring import (
    ALPHABET,
    BLOSUM62,
    GAP_CHAR,
    InvalidResidueError,
    gap_cost,
    invalid_residues,
    score,
    sum_of_pairs_weight,
)
from trialign.scoring.blosum62 import residue_index


class TestMatrix:
    """Matrix shape and content."""

    def test_shape(self):
        """Test that the matrix covers the 20 standard residues."""
        assert BLOSUM62.shape == (20, 20)
        assert len(ALPHABET) == 20

    def test_symmetric(self):
        """Test that the matrix equals its transpose."""
        assert np.array_equal(BLOSUM62, BLOSUM62.T)

    def test_pairwise_symmetry(self):
        """Test that score(a, b) == score(b, a) for every residue pair."""
        for a in ALPHABET:
            for b in ALPHABET:
                assert score(a, b) == score(b, a)

    @pytest.mark.parametrize("a,b,expected", [
        ("A", "A", 4),
        ("W", "W", 11),
        ("C", "C", 9),
        ("A", "R", -1),
        ("C", "E", -4),
        ("P", "W", -4),
        ("I", "V", 3),
        ("P", "C", -3),
        ("C", "G", -3),
    ])
    def test_known_entries(self, a, b, expected):
        """Test that published BLOSUM62 entries are reproduced."""
        assert score(a, b) == expected

    def test_matrix_is_read_only(self):
        """Test that the shared matrix cannot be modified."""
        with pytest.raises(ValueError):
            BLOSUM62[0, 0] = 100

    def test_residue_index_follows_alphabet(self):
        """Test that row indices follow ARNDCQEGHILKMFPSTWYV order."""
        assert residue_index("A") == 0
        assert residue_index("V") == 19


class TestGaps:
    """Gap handling."""

    def test_gap_cost(self):
        """Test that the linear gap cost is -6."""
        assert gap_cost() == -6

    def test_residue_against_gap(self):
        """Test that any residue paired with a gap costs -6 on either side."""
        for residue in ALPHABET:
            assert score(residue, GAP_CHAR) == -6
            assert score(GAP_CHAR, residue) == -6

    def test_gap_against_gap(self):
        """Test that two gaps score zero."""
        assert score(GAP_CHAR, GAP_CHAR) == 0


class TestSumOfPairs:
    """Three-way column weights."""

    def test_identical_column(self):
        """Test that an identical column sums the three diagonal scores."""
        assert sum_of_pairs_weight("A", "A", "A") == 12
        assert sum_of_pairs_weight("W", "W", "W") == 33

    def test_column_with_one_gap(self):
        """Test a column with one gap."""
        # A/C pair scores 0, both residues pay the gap cost
        assert sum_of_pairs_weight("A", "-", "C") == -12

    def test_column_with_two_gaps(self):
        """Test that two gaps against one residue cost two gap penalties."""
        assert sum_of_pairs_weight("A", "-", "-") == -12

    def test_all_gaps(self):
        """Test that an all-gap column scores zero."""
        assert sum_of_pairs_weight("-", "-", "-") == 0

    def test_order_independent(self):
        """Test that the weight does not depend on row order."""
        assert sum_of_pairs_weight("P", "C", "G") == sum_of_pairs_weight("G", "P", "C") == -8


class TestInvalidResidues:
    """Symbols outside the alphabet are rejected."""

    @pytest.mark.parametrize("symbol", ["B", "Z", "X", "*", "a"])
    def test_invalid_pair(self, symbol):
        """Test that scoring an unknown symbol names it."""
        with pytest.raises(InvalidResidueError) as exc_info:
            score(symbol, "A")
        assert exc_info.value.residue == symbol
        assert exc_info.value.residues == [symbol]
        assert exc_info.value.source is None

    def test_invalid_against_gap(self):
        """Test that an unknown symbol is rejected against a gap on either side."""
        with pytest.raises(InvalidResidueError):
            score("X", GAP_CHAR)
        with pytest.raises(InvalidResidueError):
            score(GAP_CHAR, "X")

    def test_invalid_residue_is_value_error(self):
        """Test that callers catching ValueError see invalid residues."""
        with pytest.raises(ValueError):
            sum_of_pairs_weight("A", "A", "J")

    def test_clean_protein(self):
        """Test that the standard alphabet has no invalid residues."""
        assert invalid_residues(ALPHABET) == []

    def test_first_appearance_order(self):
        """Test that each bad symbol is listed once, in order of first appearance."""
        assert invalid_residues("AXBXZ") == ['X', 'B', 'Z']

    def test_gap_and_lowercase(self):
        """Test that gaps and lowercase letters are invalid in an input sequence."""
        assert invalid_residues("A-a") == ['-', 'a']

    def test_error_lists_every_residue(self):
        """Test that the error message lists every bad symbol with its source."""
        error = InvalidResidueError('X', 'B', source="sequence 2")
        assert error.residue == 'X'
        assert error.residues == ['X', 'B']
        assert str(error).startswith("sequence 2: Invalid residues 'X', 'B'")

# TriAlign v0.1.0
# Any usage is subject to this software's license.
