#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Tests for sequence statistics utilities.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from trialign.io import SequenceRecord
from trialign.io_utils.result_export import format_label_table
from trialign.utils.sequence_utils import residue_counts


class TestResidueCounts:
    """Test residue counting."""

    def test_basic_counts(self):
        """Test counts are ordered by residue."""
        assert residue_counts("GATTACA") == {'A': 3, 'C': 1, 'G': 1, 'T': 2}

    def test_case_insensitive(self):
        """Test lowercase residues are folded."""
        assert residue_counts("wWp") == {'P': 1, 'W': 2}

    def test_empty_sequence(self):
        assert residue_counts("") == {}

    def test_record_counts(self):
        """Test that a record counts its own residues."""
        record = SequenceRecord(id="s1", sequence="wpcgw")
        assert record.residue_counts() == residue_counts("WPCGW") == {'C': 1, 'G': 1, 'P': 1, 'W': 2}

    def test_report_rendering(self):
        """Test the ``residue=count`` form used in text reports."""
        assert format_label_table(residue_counts("WPW")) == "P=1, W=2"

# TriAlign v0.1.0
# Any usage is subject to this software's license.
