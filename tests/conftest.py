#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
TriAlign v0.1.0

Pytest configuration and shared fixtures.

Author: TriAlign Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from trialign.graph_core.edit_graph_builder import EditGraphBuilder
from trialign.graph_core.wda_graph import WDAGraph


@pytest.fixture
def temp_output_dir():
    """Create temporary output directory for tests."""
    temp_dir = tempfile.mkdtemp(prefix="trialign_test_")
    yield Path(temp_dir)
    # Cleanup after test
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def write_fasta(temp_output_dir):
    """Factory writing a one-record FASTA file into the temp directory."""
    def _write(name, sequence, header=None):
        path = temp_output_dir / name
        path.write_text(f">{header or Path(name).stem}\n{sequence}\n")
        return path
    return _write


@pytest.fixture
def fasta_trio(write_fasta):
    """Three FASTA files holding AC, AC, AC."""
    return [
        write_fasta("seq1.fa", "AC"),
        write_fasta("seq2.fa", "AC"),
        write_fasta("seq3.fa", "AC"),
    ]


@pytest.fixture
def edit_graph():
    """Factory loading the edit graph of three sequences straight into a WDAGraph."""
    def _build(seq1, seq2, seq3, anchored=False):
        builder = EditGraphBuilder(constrain_endpoints=anchored)
        return WDAGraph.from_lines(builder.iter_graph_lines(seq1, seq2, seq3), source="memory")
    return _build

# TriAlign v0.1.0
# Any usage is subject to this software's license.
