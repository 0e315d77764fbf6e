#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Result export: XML result blocks, JSON summaries and plain-text alignment
reports for highest-weight path searches.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Sequence
from xml.sax.saxutils import escape, quoteattr

from trialign.graph_core.wda_graph import PathResult

logger = logging.getLogger(__name__)


REPORT_FORMATS = ('xml', 'json', 'text')

REPORT_EXTENSIONS = {
    'xml': '.xml',
    'json': '.json',
    'text': '.txt',
}

NO_PATH_MESSAGE = "No Path Found!"

# Significant digits
EDGE_WEIGHT_PRECISION = 3
SCORE_PRECISION = 6


# ============================================================================
#                           FORMATTING HELPERS
# ============================================================================

def format_number(value: float, precision: int) -> str:
    """Render a number with ``precision`` significant digits, trailing zeros dropped."""
    return f"{value:.{precision}g}"


def xml_result(result_type: str, value: str) -> str:
    """One ``<result>`` element of an XML report."""
    return f'    <result type ="{result_type}">{escape(value)}</result>\n'


def format_label_table(table: dict[str, Any], precision: int | None = None) -> str:
    """
    Render a label table as ``label=value, label=value``.

    Example:
        >>> format_label_table({'A--': -12.0, 'AAA': 12.0}, precision=3)
        'A--=-12, AAA=12'
    """
    parts = []
    for label, value in table.items():
        if precision is not None:
            value = format_number(value, precision)
        parts.append(f"{label}={value}")
    return ", ".join(parts)


def alignment_rows(path: Sequence[str]) -> tuple[str, str, str]:
    """
    The three gapped alignment rows spelled by a path of column labels.

    Example:
        >>> alignment_rows(['AAA', 'C-C'])
        ('AC', 'A-', 'AC')
    """
    rows = ([], [], [])
    for column in path:
        for row, symbol in zip(rows, column):
            row.append(symbol)
    return tuple(''.join(row) for row in rows)


def _sequence_summaries(sequences: Sequence[Any] | None) -> list[dict[str, Any]]:
    if not sequences:
        return []
    return [
        {
            "id": record.id,
            "length": record.length,
            "first_line": record.first_line,
            "residue_counts": record.residue_counts(),
        }
        for record in sequences
    ]


# ============================================================================
#                           REPORT RENDERERS
# ============================================================================

def format_xml_report(result: PathResult) -> str:
    """
    XML results block.

    Example:
          <results type="part?" file="seqs.graph.txt">
            <result type ="edge_weights">AAA=12, ...</result>
            <result type ="edge_histogram">AAA=1, ...</result>
            <result type ="score">39</result>
            <result type ="beginning_vertex">0,0,0</result>
            <result type ="end_vertex">2,2,2</result>
            <result type ="path">AAA
        CCC</result>
          </results>
    """
    lines = [f'  <results type="part?" file={quoteattr(result.source or "")}>\n']
    lines.append(xml_result("edge_weights", format_label_table(result.edge_weights, EDGE_WEIGHT_PRECISION)))
    lines.append(xml_result("edge_histogram", format_label_table(result.edge_frequencies)))

    if not result.found:
        lines.append(xml_result("path", NO_PATH_MESSAGE))
    else:
        lines.append(xml_result("score", format_number(result.score, SCORE_PRECISION)))
        lines.append(xml_result("beginning_vertex", result.start_label))
        lines.append(xml_result("end_vertex", result.end_label))
        lines.append(xml_result("path", "\n".join(result.path)))

    lines.append("  </results>\n")
    return ''.join(lines)


def result_to_dict(result: PathResult, sequences: Sequence[Any] | None = None) -> dict[str, Any]:
    """JSON-friendly report dictionary."""
    report = result.to_dict()
    report["sequences"] = _sequence_summaries(sequences)
    if result.found:
        report["alignment"] = list(alignment_rows(result.path))
    else:
        report["message"] = NO_PATH_MESSAGE
    return report


def format_json_report(result: PathResult, sequences: Sequence[Any] | None = None) -> str:
    return json.dumps(result_to_dict(result, sequences), indent=2) + "\n"


def format_text_report(result: PathResult, sequences: Sequence[Any] | None = None) -> str:
    """Human-readable summary with the aligned rows."""
    lines = [f"Graph: {result.source or '<memory>'}"]

    for i, summary in enumerate(_sequence_summaries(sequences), start=1):
        lines.append(f"Sequence {i}: {summary['id']} ({summary['length']} residues)")
        if summary['residue_counts']:
            lines.append(f"  Residues: {format_label_table(summary['residue_counts'])}")

    if not result.found:
        lines.append(NO_PATH_MESSAGE)
    else:
        lines.append(f"Score: {format_number(result.score, SCORE_PRECISION)}")
        lines.append(f"Path: {result.start_label} -> {result.end_label} ({len(result.path)} columns)")
        lines.append("")
        lines.extend(alignment_rows(result.path))

    lines.append("")
    lines.append(f"Distinct edge labels: {len(result.edge_frequencies)}")
    lines.append(f"Total edges: {sum(result.edge_frequencies.values())}")
    return "\n".join(lines) + "\n"


def render_report(
    result: PathResult,
    fmt: str = 'xml',
    sequences: Sequence[Any] | None = None,
) -> str:
    """
    Render a path result in one of REPORT_FORMATS.

    Raises:
        ValueError: Unknown format
    """
    if fmt == 'xml':
        return format_xml_report(result)
    if fmt == 'json':
        return format_json_report(result, sequences)
    if fmt == 'text':
        return format_text_report(result, sequences)
    raise ValueError(f"Unknown report format {fmt!r}; expected one of {', '.join(REPORT_FORMATS)}")


def export_report(
    result: PathResult,
    output_path: str | Path,
    fmt: str = 'xml',
    sequences: Sequence[Any] | None = None,
) -> Path:
    """
    Write a rendered report to disk.

    Returns:
        Path written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w') as f:
        f.write(render_report(result, fmt, sequences))

    logger.info(f"Report ({fmt}) written to {output_path}")
    return output_path


# TriAlign v0.1.0
# Any usage is subject to this software's license.
