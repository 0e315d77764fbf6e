#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Tests for XML / JSON / text result reports.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import json

import pytest

from trialign.graph_core import PathResult
from trialign.io import SequenceRecord
from trialign.io_utils import (
    alignment_rows,
    export_report,
    format_text_report,
    format_xml_report,
    render_report,
    result_to_dict,
)
from trialign.io_utils.result_export import format_label_table, format_number


@pytest.fixture
def found_result(edit_graph):
    graph = edit_graph("AC", "AC", "AC")
    result = graph.result()
    result.source = "seq1.fa_seq2.fa_seq3.fa.graph.txt"
    return result


@pytest.fixture
def empty_result():
    return PathResult(source="empty.graph.txt", found=False)


@pytest.fixture
def records():
    return [
        SequenceRecord(id="s1", sequence="AC", description="s1 first"),
        SequenceRecord(id="s2", sequence="AC"),
        SequenceRecord(id="s3", sequence="AC"),
    ]


class TestFormattingHelpers:
    """Number and table formatting."""

    def test_format_number(self):
        assert format_number(39.0, 6) == "39"
        assert format_number(-2.5, 3) == "-2.5"
        assert format_number(1234.5678, 6) == "1234.57"

    def test_label_table(self):
        assert format_label_table({"A--": -12.0, "AAA": 12.0}, precision=3) == "A--=-12, AAA=12"
        assert format_label_table({"A--": 4, "AAA": 1}) == "A--=4, AAA=1"
        assert format_label_table({}) == ""

    def test_alignment_rows(self):
        assert alignment_rows(["AAA", "C-C"]) == ("AC", "A-", "AC")
        assert alignment_rows([]) == ("", "", "")


class TestXmlReport:
    """XML results block."""

    def test_found(self, found_result):
        xml = format_xml_report(found_result)

        assert xml.startswith('  <results type="part?" file="seq1.fa_seq2.fa_seq3.fa.graph.txt">\n')
        assert xml.endswith("  </results>\n")
        assert '    <result type ="score">39</result>\n' in xml
        assert '<result type ="beginning_vertex">0,0,0</result>' in xml
        assert '<result type ="end_vertex">2,2,2</result>' in xml
        assert '<result type ="path">AAA\nCCC</result>' in xml
        assert "AAA=12" in xml

    def test_no_path(self, empty_result):
        xml = format_xml_report(empty_result)

        assert '<result type ="path">No Path Found!</result>' in xml
        assert 'type ="score"' not in xml
        assert 'type ="edge_weights"' in xml

    def test_source_is_escaped(self):
        xml = format_xml_report(PathResult(source='a&b".txt', found=False))
        assert "a&amp;b" in xml.splitlines()[0]


class TestJsonReport:
    """JSON summary."""

    def test_found(self, found_result, records):
        report = json.loads(render_report(found_result, "json", records))

        assert report["found"] is True
        assert report["score"] == 39
        assert report["path"] == ["AAA", "CCC"]
        assert report["alignment"] == ["AC", "AC", "AC"]
        assert report["sequences"][0] == {
            "id": "s1",
            "length": 2,
            "first_line": ">s1 first",
            "residue_counts": {"A": 1, "C": 1},
        }

    def test_no_path(self, empty_result):
        report = result_to_dict(empty_result)

        assert report["found"] is False
        assert report["message"] == "No Path Found!"
        assert report["sequences"] == []
        assert "alignment" not in report


class TestTextReport:
    """Plain-text report."""

    def test_found(self, found_result, records):
        text = format_text_report(found_result, records)

        assert "Score: 39" in text
        assert "Path: 0,0,0 -> 2,2,2 (2 columns)" in text
        assert "Sequence 1: s1 (2 residues)" in text
        assert "  Residues: A=1, C=1" in text
        assert "Total edges: 98" in text

    def test_no_path(self, empty_result):
        assert "No Path Found!" in format_text_report(empty_result)

    def test_residue_counts_per_sequence(self, found_result):
        records = [
            SequenceRecord(id="w", sequence="WWP"),
            SequenceRecord(id="e", sequence=""),
            SequenceRecord(id="g", sequence="G"),
        ]
        lines = format_text_report(found_result, records).splitlines()

        assert lines[1:5] == [
            "Sequence 1: w (3 residues)",
            "  Residues: P=1, W=2",
            "Sequence 2: e (0 residues)",
            "Sequence 3: g (1 residues)",
        ]
        assert "  Residues: G=1" in lines


class TestExport:
    """Writing reports to disk."""

    def test_unknown_format(self, found_result):
        with pytest.raises(ValueError):
            render_report(found_result, "html")

    @pytest.mark.parametrize("fmt", ["xml", "json", "text"])
    def test_export(self, found_result, temp_output_dir, fmt):
        output_path = temp_output_dir / "reports" / f"report.{fmt}"
        written = export_report(found_result, output_path, fmt=fmt)

        assert written == output_path
        assert output_path.read_text() == render_report(found_result, fmt)

# TriAlign v0.1.0
# Any usage is subject to this software's license.
