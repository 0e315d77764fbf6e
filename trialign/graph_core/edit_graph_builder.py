#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Edit graph builder for three-sequence alignment.

Writes the line-oriented graph description consumed by WDAGraph:

    V i,j,k [START|END]
    E <column> <start i,j,k> <end i,j,k> <weight>

Vertices are triples (i, j, k) of 0-based offsets into the three sequences,
0 <= i <= n1, 0 <= j <= n2, 0 <= k <= n3, emitted with i outermost and k
innermost. That order is a topological order of the graph and WDAGraph
relies on it.

There is an edge from (i,j,k) to (i',j',k') whenever i' = i or i+1,
j' = j or j+1, k' = k or k+1, at least one index advances, and every
advancing sequence still has a residue left. The edge label is the aligned
column, e.g. the edge from (10,37,5) to (11,37,6) is labelled "V-C" when V is
the 11th residue of the first sequence and C the 6th of the third. Edge
weights are BLOSUM62 sum-of-pairs scores of the column.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from trialign.scoring.blosum62 import (
    GAP_CHAR,
    InvalidResidueError,
    invalid_residues,
    sum_of_pairs_weight,
)

logger = logging.getLogger(__name__)


# Which sequences advance, in emission order: singles, pairs, then all three
ADVANCE_PATTERNS: Tuple[Tuple[bool, bool, bool], ...] = (
    (True, False, False),
    (False, True, False),
    (False, False, True),
    (True, True, False),
    (False, True, True),
    (True, False, True),
    (True, True, True),
)

START_MARKER = "START"
END_MARKER = "END"


@dataclass
class GraphFileStats:
    """Summary of a written graph description."""
    vertex_count: int
    edge_count: int
    graph_path: Optional[Path] = None


def vertex_label(i: int, j: int, k: int) -> str:
    """Label of the vertex at offsets (i, j, k)."""
    return f"{i},{j},{k}"


@lru_cache(maxsize=None)
def column_weight(column: str) -> int:
    """Sum-of-pairs weight of a three-symbol column (cached per distinct column)."""
    return sum_of_pairs_weight(column[0], column[1], column[2])


def _validate_sequences(*sequences: str):
    for number, sequence in enumerate(sequences, start=1):
        invalid = invalid_residues(sequence)
        if invalid:
            raise InvalidResidueError(*invalid, source=f"sequence {number}")


class EditGraphBuilder:
    """
    Build the edit graph description for three sequences.

    Typical use:
        builder = EditGraphBuilder()
        stats = builder.build_graph_file(seq1, seq2, seq3, "seqs.graph.txt")
    """

    def __init__(self, constrain_endpoints: bool = False):
        """
        Args:
            constrain_endpoints: Tag (0,0,0) START and (n1,n2,n3) END so the
                engine only reports the global alignment path
        """
        self.constrain_endpoints = constrain_endpoints

    def iter_vertex_lines(self, seq1: str, seq2: str, seq3: str) -> Iterator[str]:
        """Yield vertex lines in topological (nested i, j, k) order."""
        _validate_sequences(seq1, seq2, seq3)
        yield from self._vertex_lines(seq1, seq2, seq3)

    def iter_edge_lines(self, seq1: str, seq2: str, seq3: str) -> Iterator[str]:
        """Yield edge lines, grouped by start vertex in vertex order."""
        _validate_sequences(seq1, seq2, seq3)
        yield from self._edge_lines(seq1, seq2, seq3)

    def iter_graph_lines(self, seq1: str, seq2: str, seq3: str) -> Iterator[str]:
        """Yield the complete description: all vertices, then all edges."""
        _validate_sequences(seq1, seq2, seq3)
        yield from self._vertex_lines(seq1, seq2, seq3)
        yield from self._edge_lines(seq1, seq2, seq3)

    def _vertex_lines(self, seq1: str, seq2: str, seq3: str) -> Iterator[str]:
        n1, n2, n3 = len(seq1), len(seq2), len(seq3)

        for i in range(n1 + 1):
            for j in range(n2 + 1):
                for k in range(n3 + 1):
                    line = f"V {vertex_label(i, j, k)}"
                    if self.constrain_endpoints:
                        if i == 0 and j == 0 and k == 0:
                            line += f" {START_MARKER}"
                        elif i == n1 and j == n2 and k == n3:
                            line += f" {END_MARKER}"
                    yield line

    def _edge_lines(self, seq1: str, seq2: str, seq3: str) -> Iterator[str]:
        sequences = (seq1, seq2, seq3)
        n1, n2, n3 = len(seq1), len(seq2), len(seq3)

        for i in range(n1 + 1):
            for j in range(n2 + 1):
                for k in range(n3 + 1):
                    start = vertex_label(i, j, k)
                    for column, (i2, j2, k2) in outgoing_columns(sequences, (i, j, k)):
                        end = vertex_label(i2, j2, k2)
                        yield f"E {column} {start} {end} {column_weight(column)}"

    def build_graph_file(
        self,
        seq1: str,
        seq2: str,
        seq3: str,
        graph_path: Union[str, Path],
    ) -> GraphFileStats:
        """
        Write the edit graph for three sequences to a file.

        Args:
            seq1, seq2, seq3: Residue sequences (BLOSUM62 alphabet, upper case)
            graph_path: Output graph description path

        Returns:
            GraphFileStats with vertex and edge counts

        Raises:
            InvalidResidueError: If a sequence contains a symbol outside the alphabet
        """
        graph_path = Path(graph_path)
        _validate_sequences(seq1, seq2, seq3)

        logger.info(
            f"Building edit graph for sequences of length "
            f"{len(seq1)}, {len(seq2)}, {len(seq3)} -> {graph_path}"
        )

        graph_path.parent.mkdir(parents=True, exist_ok=True)
        vertex_count = 0
        edge_count = 0

        with open(graph_path, 'w') as handle:
            for line in self._vertex_lines(seq1, seq2, seq3):
                handle.write(line + '\n')
                vertex_count += 1
            for line in self._edge_lines(seq1, seq2, seq3):
                handle.write(line + '\n')
                edge_count += 1

        logger.info(f"Graph file written: {vertex_count:,} vertices, {edge_count:,} edges")
        return GraphFileStats(vertex_count, edge_count, graph_path)


def outgoing_columns(
    sequences: Sequence[str],
    offsets: Tuple[int, int, int],
) -> List[Tuple[str, Tuple[int, int, int]]]:
    """
    Alignment columns leaving a vertex and the offsets they lead to.

    A sequence may only advance while it still has a residue at its offset,
    so a vertex with every sequence exhausted has no outgoing columns.
    """
    remaining = [offsets[s] < len(sequences[s]) for s in range(3)]
    columns = []

    for pattern in ADVANCE_PATTERNS:
        if any(advance and not remaining[s] for s, advance in enumerate(pattern)):
            continue

        column = ''.join(
            sequences[s][offsets[s]] if advance else GAP_CHAR
            for s, advance in enumerate(pattern)
        )
        end = tuple(offsets[s] + 1 if advance else offsets[s] for s, advance in enumerate(pattern))
        columns.append((column, end))

    return columns


# TriAlign v0.1.0
# Any usage is subject to this software's license.
