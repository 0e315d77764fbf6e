"""
Sequence I/O module for TriAlign.

Reads the FASTA inputs of an alignment run.

CONSOLIDATED MODULES:
- io_core_module.py: SequenceRecord, FASTA reading
"""

from .io_core_module import (
    SequenceRecord,
    is_gzipped,
    open_file,
    read_fasta,
    read_sequence,
)

__all__ = [
    "SequenceRecord",
    "is_gzipped",
    "open_file",
    "read_fasta",
    "read_sequence",
]
