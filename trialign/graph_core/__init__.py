"""
TriAlign v0.1.0

Edit graph construction and highest-weight path search.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

from .edit_graph_builder import (
    EditGraphBuilder,
    GraphFileStats,
    outgoing_columns,
    vertex_label,
)
from .wda_graph import (
    UNREACHED,
    Edge,
    MalformedGraphError,
    PathResult,
    Vertex,
    WDAGraph,
)

__all__ = [
    # Builder
    "EditGraphBuilder",
    "GraphFileStats",
    "outgoing_columns",
    "vertex_label",
    # Engine
    "UNREACHED",
    "Edge",
    "MalformedGraphError",
    "PathResult",
    "Vertex",
    "WDAGraph",
]
