#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Core I/O module for TriAlign.

Consolidated module containing:
- SequenceRecord, the in-memory form of one FASTA entry
- FASTA file reading (plain or gzipped) via Biopython
- Single-sequence convenience loader used by the alignment pipeline
"""

# =============================================================================
# SECTION 1: IMPORTS AND DEPENDENCIES
# =============================================================================

import gzip
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, TextIO, Union

from Bio import SeqIO

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 2: CORE SEQUENCE DATA STRUCTURE
# =============================================================================

@dataclass
class SequenceRecord:
    """
    One FASTA entry.

    Attributes:
        id: Record identifier (first word of the header)
        sequence: Residues, upper-cased
        description: Full header text without the leading '>'
        metadata: Additional metadata (source file, ...)
    """
    id: str
    sequence: str
    description: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.sequence = self.sequence.upper()

    @property
    def length(self) -> int:
        return len(self.sequence)

    @property
    def first_line(self) -> str:
        """Header line as it appears in the file."""
        return f">{self.description or self.id}"

    def residue_counts(self) -> Dict[str, int]:
        # Import here to avoid circular dependency (utils -> pipeline -> io)
        from trialign.utils.sequence_utils import residue_counts
        return residue_counts(self.sequence)

    def __len__(self) -> int:
        return self.length

    def __repr__(self) -> str:
        return f"SequenceRecord(id='{self.id}', length={self.length})"


# =============================================================================
# SECTION 3: FILE UTILITIES
# =============================================================================

def is_gzipped(filepath: Union[str, Path]) -> bool:
    """True if the path carries a gzip suffix."""
    return Path(filepath).suffix in ('.gz', '.gzip')


def open_file(filepath: Union[str, Path], mode: str = 'r') -> TextIO:
    """
    Open file with automatic gzip detection.

    Args:
        filepath: Path to file
        mode: File mode ('r' or 'w')

    Returns:
        File handle
    """
    filepath = Path(filepath)

    if is_gzipped(filepath):
        return gzip.open(filepath, 'rt' if 'r' in mode else 'wt')
    return open(filepath, mode)


# =============================================================================
# SECTION 4: FASTA FILE I/O
# =============================================================================

def read_fasta(filepath: Union[str, Path]) -> Iterator[SequenceRecord]:
    """
    Read FASTA file and yield SequenceRecord objects.

    Args:
        filepath: Path to FASTA file (can be gzipped)

    Yields:
        SequenceRecord objects

    Raises:
        FileNotFoundError: If the file does not exist
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"FASTA file not found: {filepath}")

    with open_file(filepath) as handle:
        for record in SeqIO.parse(handle, "fasta"):
            yield SequenceRecord(
                id=record.id,
                sequence=str(record.seq),
                description=record.description,
                metadata={'source': str(filepath)},
            )


def read_sequence(filepath: Union[str, Path]) -> SequenceRecord:
    """
    Read the first record of a FASTA file.

    Extra records are ignored with a warning.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file holds no FASTA record
    """
    records = read_fasta(filepath)
    first = next(records, None)

    if first is None:
        raise ValueError(f"No FASTA records in {filepath}")

    if next(records, None) is not None:
        logger.warning(f"{filepath} holds more than one record; using {first.id}")
    records.close()

    logger.debug(f"Read {first.id} ({first.length} residues) from {filepath}")
    return first
