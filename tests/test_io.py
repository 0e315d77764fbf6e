#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Tests for FASTA input.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import gzip

import pytest

from trialign.io import (
    SequenceRecord,
    is_gzipped,
    read_fasta,
    read_sequence,
)


class TestSequenceRecord:
    """In-memory FASTA entries."""

    def test_upper_cases_sequence(self):
        record = SequenceRecord(id="s1", sequence="wpcg")
        assert record.sequence == "WPCG"
        assert len(record) == record.length == 4

    def test_first_line(self):
        assert SequenceRecord(id="s1", sequence="A", description="s1 kinase").first_line == ">s1 kinase"
        assert SequenceRecord(id="s1", sequence="A").first_line == ">s1"

    def test_residue_counts(self):
        assert SequenceRecord(id="s1", sequence="WWP").residue_counts() == {'P': 1, 'W': 2}

    def test_metadata_is_per_record(self):
        first = SequenceRecord(id="a", sequence="A")
        first.metadata['source'] = 'a.fa'
        assert SequenceRecord(id="b", sequence="A").metadata == {}

    def test_repr(self):
        assert repr(SequenceRecord(id="s1", sequence="AC")) == "SequenceRecord(id='s1', length=2)"


class TestReadFasta:
    """Reading FASTA files with Biopython."""

    def test_single_record(self, write_fasta):
        path = write_fasta("one.fa", "wpcg", header="p1 test protein")
        record = read_sequence(path)

        assert record.id == "p1"
        assert record.description == "p1 test protein"
        assert record.sequence == "WPCG"
        assert record.metadata['source'] == str(path)

    def test_multi_line_sequence(self, temp_output_dir):
        path = temp_output_dir / "wrapped.fa"
        path.write_text(">p1\nACDE\nFGHI\n")
        assert read_sequence(path).sequence == "ACDEFGHI"

    def test_first_record_used(self, temp_output_dir):
        path = temp_output_dir / "many.fa"
        path.write_text(">a\nAC\n>b\nWW\n>c\nPP\n")

        assert read_sequence(path).id == "a"
        assert [r.id for r in read_fasta(path)] == ["a", "b", "c"]

    def test_empty_record(self, temp_output_dir):
        path = temp_output_dir / "blank.fa"
        path.write_text(">blank\n")
        assert read_sequence(path).sequence == ""

    def test_gzipped(self, temp_output_dir):
        path = temp_output_dir / "seq.fa.gz"
        with gzip.open(path, 'wt') as handle:
            handle.write(">gz\nWPC\n")

        assert is_gzipped(path)
        assert read_sequence(path).sequence == "WPC"

    def test_no_records(self, temp_output_dir):
        path = temp_output_dir / "empty.fa"
        path.write_text("")
        with pytest.raises(ValueError):
            read_sequence(path)

    def test_missing_file(self, temp_output_dir):
        with pytest.raises(FileNotFoundError):
            read_sequence(temp_output_dir / "missing.fa")

# TriAlign v0.1.0
# Any usage is subject to this software's license.
