"""
Utilities module for TriAlign.

This module provides core utilities for the alignment pipeline:
- Pipeline orchestration (FASTA -> edit graph -> path -> report)
- Sequence statistics helpers
"""

from .pipeline import (
    PIPELINE_STEPS,
    AlignmentPipeline,
    default_graph_filename,
)
from .sequence_utils import residue_counts

__all__ = [
    # Pipeline
    "PIPELINE_STEPS",
    "AlignmentPipeline",
    "default_graph_filename",
    # Sequence helpers
    "residue_counts",
]
