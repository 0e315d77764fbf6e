#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Weighted directed acyclic graph (WDAG) engine with highest-weight path search.

The graph is read from a line-oriented description:

  1. Vertex lines, one per vertex, in topological order (parents precede
     children). This order drives the dynamic program.

        V <label> [START|END]

     Labels are unique. At most one vertex may be tagged START and at most
     one END; untagged graphs are searched without path constraints.

  2. Edge lines, one per edge, after every vertex line. Edge labels need not
     be unique; both endpoints must already be declared and the weight must
     be a finite decimal number.

        E <label> <start_vertex> <end_vertex> <weight>

Malformed input raises MalformedGraphError. The engine does not attempt to
repair or partially load a description.

Vertices and edges are kept in flat lists and refer to each other by integer
index, so the graph needs no teardown beyond dropping the object.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


# Weight of a vertex that no valid path reaches yet
UNREACHED = float('-inf')

VERTEX_RECORD = "V"
EDGE_RECORD = "E"
START_MARKER = "START"
END_MARKER = "END"


class MalformedGraphError(ValueError):
    """Raised when a graph description is structurally invalid."""

    def __init__(self, message: str, line_number: Optional[int] = None,
                 source: Optional[str] = None):
        self.line_number = line_number
        self.source = source
        location = ""
        if source:
            location += f"{source}"
        if line_number is not None:
            location += f"{':' if source else 'line '}{line_number}"
        super().__init__(f"{location}: {message}" if location else message)


# ============================================================================
# Core Data Structures
# ============================================================================

@dataclass
class Vertex:
    """Graph vertex plus the traversal state of the last path search."""
    label: str
    index: int  # Position in the topological order
    weight: float = UNREACHED  # Best path weight ending here
    best_incoming_edge: Optional[int] = None  # Edge index achieving weight

    @property
    def is_reached(self) -> bool:
        return self.weight != UNREACHED


@dataclass
class Edge:
    """Weighted edge between two vertex indices."""
    label: str
    start: int
    end: int
    weight: float


@dataclass
class PathResult:
    """Outcome of a highest-weight path search plus edge statistics."""
    source: Optional[str]
    found: bool
    score: Optional[float] = None
    start_label: Optional[str] = None
    end_label: Optional[str] = None
    path: List[str] = field(default_factory=list)
    edge_weights: Dict[str, float] = field(default_factory=dict)
    edge_frequencies: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to a JSON-friendly dictionary."""
        return {
            "source": self.source,
            "found": self.found,
            "score": self.score,
            "beginning_vertex": self.start_label,
            "end_vertex": self.end_label,
            "path": list(self.path),
            "edge_weights": dict(self.edge_weights),
            "edge_histogram": dict(self.edge_frequencies),
        }


# ============================================================================
# Graph
# ============================================================================

class WDAGraph:
    """
    Weighted DAG with adjacency lists and highest-weight path search.

    Typical use:
        graph = WDAGraph.from_file("seqs.graph.txt")
        graph.find_highest_weight_path()
        result = graph.result()
    """

    def __init__(self, source: Optional[str] = None):
        self.source = source
        self.vertices: List[Vertex] = []
        self.edges: List[Edge] = []
        self.vertex_index: Dict[str, int] = {}
        # Incoming and outgoing edge indices per vertex index
        self.incident_edges: List[List[int]] = []

        self.start_vertex: Optional[int] = None
        self.end_vertex: Optional[int] = None
        self.best_vertex: Optional[int] = None

        self._edge_weights: Dict[str, float] = {}
        self._edge_frequencies: Counter = Counter()
        self._traversed = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, graph_path: Union[str, Path]) -> 'WDAGraph':
        """
        Load a graph description file.

        Raises:
            FileNotFoundError: If the file does not exist
            MalformedGraphError: If the description is invalid
        """
        graph_path = Path(graph_path)
        if not graph_path.exists():
            raise FileNotFoundError(f"Graph file not found: {graph_path}")

        with open(graph_path, 'r') as handle:
            graph = cls.from_lines(handle, source=str(graph_path))

        logger.info(
            f"Loaded graph {graph_path}: {graph.vertex_count:,} vertices, "
            f"{graph.edge_count:,} edges"
        )
        return graph

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: Optional[str] = None) -> 'WDAGraph':
        """Build a graph from description lines."""
        graph = cls(source=source)
        graph.load_lines(lines)
        return graph

    def load_lines(self, lines: Iterable[str]):
        """Parse description lines into this graph; blank lines are ignored."""
        for line_number, line in enumerate(lines, start=1):
            tokens = line.split()
            if not tokens:
                continue

            try:
                if tokens[0] == VERTEX_RECORD:
                    self._parse_vertex(tokens)
                elif tokens[0] == EDGE_RECORD:
                    self._parse_edge(tokens)
                else:
                    raise MalformedGraphError(f"Unknown record type {tokens[0]!r}")
            except MalformedGraphError as e:
                if e.line_number is not None:
                    raise
                raise MalformedGraphError(
                    str(e), line_number=line_number, source=self.source
                ) from None

    def _parse_vertex(self, tokens: List[str]):
        if len(tokens) < 2 or len(tokens) > 3:
            raise MalformedGraphError(f"Vertex record needs a label and an optional marker, got {len(tokens) - 1} fields")

        if self.edges:
            raise MalformedGraphError(f"Vertex record {tokens[1]!r} follows edge records")

        marker = tokens[2] if len(tokens) == 3 else None
        self.add_vertex(tokens[1], marker)

    def _parse_edge(self, tokens: List[str]):
        if len(tokens) != 5:
            raise MalformedGraphError(f"Edge record needs 4 fields, got {len(tokens) - 1}")

        try:
            weight = float(tokens[4])
        except ValueError:
            raise MalformedGraphError(f"Invalid edge weight {tokens[4]!r}") from None

        self.add_edge(tokens[1], tokens[2], tokens[3], weight)

    def add_vertex(self, label: str, marker: Optional[str] = None) -> Vertex:
        """
        Register a vertex at the end of the topological order.

        Args:
            label: Unique vertex label
            marker: START, END or None

        Raises:
            MalformedGraphError: Duplicate label, unknown marker or a second
                START/END vertex
        """
        if label in self.vertex_index:
            raise MalformedGraphError(f"Duplicate vertex label {label!r}")
        if marker not in (None, START_MARKER, END_MARKER):
            raise MalformedGraphError(f"Unknown vertex marker {marker!r}")

        vertex = Vertex(label=label, index=len(self.vertices))

        if marker == START_MARKER:
            if self.start_vertex is not None:
                raise MalformedGraphError(f"Second START vertex {label!r}")
            self.start_vertex = vertex.index
        elif marker == END_MARKER:
            if self.end_vertex is not None:
                raise MalformedGraphError(f"Second END vertex {label!r}")
            self.end_vertex = vertex.index

        self.vertices.append(vertex)
        self.vertex_index[label] = vertex.index
        self.incident_edges.append([])
        self._traversed = False
        return vertex

    def add_edge(self, label: str, start_label: str, end_label: str, weight: float) -> Edge:
        """
        Register an edge between two declared vertices.

        Raises:
            MalformedGraphError: Non-finite weight, unknown endpoint, or an
                edge that does not point forward in the vertex order
        """
        if not math.isfinite(weight):
            raise MalformedGraphError(f"Invalid edge weight {weight!r} for edge {label!r}")

        start = self._lookup(start_label)
        end = self._lookup(end_label)
        if start >= end:
            raise MalformedGraphError(
                f"Edge {label!r} from {start_label!r} to {end_label!r} "
                f"does not follow the vertex order"
            )

        edge = Edge(label=label, start=start, end=end, weight=weight)
        edge_id = len(self.edges)
        self.edges.append(edge)
        self.incident_edges[start].append(edge_id)
        self.incident_edges[end].append(edge_id)

        if label not in self._edge_weights:
            self._edge_weights[label] = weight
        self._edge_frequencies[label] += 1
        self._traversed = False
        return edge

    def _lookup(self, label: str) -> int:
        try:
            return self.vertex_index[label]
        except KeyError:
            raise MalformedGraphError(f"Unknown vertex {label!r}") from None

    # ------------------------------------------------------------------
    # Constraints
    # ------------------------------------------------------------------

    @property
    def is_start_constrained(self) -> bool:
        return self.start_vertex is not None

    @property
    def is_end_constrained(self) -> bool:
        return self.end_vertex is not None

    def set_start(self, label: Optional[str]):
        """Constrain paths to begin at ``label`` (None removes the constraint)."""
        self.start_vertex = None if label is None else self._lookup(label)
        self._traversed = False

    def set_end(self, label: Optional[str]):
        """Constrain paths to finish at ``label`` (None removes the constraint)."""
        self.end_vertex = None if label is None else self._lookup(label)
        self._traversed = False

    def clear_constraints(self):
        self.set_start(None)
        self.set_end(None)

    def _constraint_label(self, index: Optional[int]) -> str:
        return "free" if index is None else self.vertices[index].label

    # ------------------------------------------------------------------
    # Highest-weight path
    # ------------------------------------------------------------------

    def _reset_traversal_state(self):
        for vertex in self.vertices:
            vertex.weight = UNREACHED
            vertex.best_incoming_edge = None
        self.best_vertex = None

    def find_highest_weight_path(self) -> Optional[Vertex]:
        """
        Find the highest-weight path with one forward pass in vertex order.

        Without a START vertex every vertex may begin a (zero-weight) path;
        with one, vertices before it are skipped and only paths leaving it
        count. With an END vertex the scan stops there and that vertex is the
        result; otherwise the heaviest reached vertex wins, earliest first
        on ties.

        Returns:
            The final vertex of the best path, or None when the graph is empty
            or the END vertex cannot be reached
        """
        self._reset_traversal_state()
        logger.debug(
            f"Path search over {self.vertex_count:,} vertices "
            f"(start={self._constraint_label(self.start_vertex)}, "
            f"end={self._constraint_label(self.end_vertex)})"
        )
        start_found = False
        best: Optional[Vertex] = None

        for vertex in self.vertices:
            if self.is_start_constrained:
                if not start_found:
                    if vertex.index != self.start_vertex:
                        continue
                    start_found = True
                    vertex.weight = 0.0
            else:
                vertex.weight = 0.0

            for edge_id in self.incident_edges[vertex.index]:
                edge = self.edges[edge_id]
                if edge.end != vertex.index:
                    continue

                predecessor = self.vertices[edge.start]
                if self.is_start_constrained and not predecessor.is_reached:
                    continue

                path_weight = predecessor.weight + edge.weight
                if path_weight > vertex.weight:
                    vertex.weight = path_weight
                    vertex.best_incoming_edge = edge_id

            if self.is_end_constrained:
                if vertex.index == self.end_vertex:
                    if vertex.is_reached:
                        best = vertex
                    break
                continue

            if not vertex.is_reached:
                continue
            if best is None or vertex.weight > best.weight:
                best = vertex

        self.best_vertex = best.index if best is not None else None
        self._traversed = True

        if best is None:
            logger.info("No path found")
        else:
            logger.info(f"Highest-weight path ends at {best.label} with weight {best.weight:g}")
        return best

    def _ensure_traversed(self):
        if not self._traversed:
            self.find_highest_weight_path()

    @property
    def best_terminal_vertex(self) -> Optional[Vertex]:
        self._ensure_traversed()
        if self.best_vertex is None:
            return None
        return self.vertices[self.best_vertex]

    def path_edges(self) -> List[Edge]:
        """Edges of the best path from its first vertex to its last."""
        vertex = self.best_terminal_vertex
        if vertex is None:
            return []

        reverse_path = []
        while vertex.best_incoming_edge is not None:
            edge = self.edges[vertex.best_incoming_edge]
            reverse_path.append(edge)
            vertex = self.vertices[edge.start]

        reverse_path.reverse()
        return reverse_path

    def path_labels(self) -> List[str]:
        return [edge.label for edge in self.path_edges()]

    def path_start_label(self) -> Optional[str]:
        """Label of the first vertex on the best path."""
        vertex = self.best_terminal_vertex
        if vertex is None:
            return None

        while vertex.best_incoming_edge is not None:
            vertex = self.vertices[self.edges[vertex.best_incoming_edge].start]
        return vertex.label

    def path_end_label(self) -> Optional[str]:
        vertex = self.best_terminal_vertex
        return vertex.label if vertex is not None else None

    def best_score(self) -> Optional[float]:
        vertex = self.best_terminal_vertex
        return vertex.weight if vertex is not None else None

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def edge_weights(self) -> Dict[str, float]:
        """Weight of the first edge seen for each distinct label, ordered by label."""
        return {label: self._edge_weights[label] for label in sorted(self._edge_weights)}

    def edge_frequencies(self) -> Dict[str, int]:
        """Number of edges carrying each distinct label, ordered by label."""
        return {label: self._edge_frequencies[label] for label in sorted(self._edge_frequencies)}

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def result(self) -> PathResult:
        """Collect the path search outcome and edge statistics."""
        vertex = self.best_terminal_vertex
        if vertex is None:
            return PathResult(
                source=self.source,
                found=False,
                edge_weights=self.edge_weights(),
                edge_frequencies=self.edge_frequencies(),
            )

        return PathResult(
            source=self.source,
            found=True,
            score=vertex.weight,
            start_label=self.path_start_label(),
            end_label=vertex.label,
            path=self.path_labels(),
            edge_weights=self.edge_weights(),
            edge_frequencies=self.edge_frequencies(),
        )

    def __repr__(self) -> str:
        return (f"WDAGraph(source={self.source!r}, vertices={self.vertex_count}, "
                f"edges={self.edge_count})")


# TriAlign v0.1.0
# Any usage is subject to this software's license.
