"""
Core data structures and utilities for hrgptyper.

Modules:
    models: Pydantic models for records, scan results and MAAB rows
    sequence: Sequence normalization and input from FASTA, vectors and tables
    exceptions: Input-validation errors of the MAAB pipeline
"""

from .exceptions import (
    EmptySequenceError,
    InvalidOrderError,
    LengthMismatchError,
    MaabError,
)
from .models import (
    CompositionStats,
    MaabClass,
    MaabResult,
    MotifHit,
    ProteinRecord,
    ScanResult,
)
from .sequence import (
    ALLOWED_AA,
    STANDARD_AA,
    SequenceError,
    normalize_sequence,
    parse_fasta,
    records_from_columns,
    records_from_dataframe,
    records_from_mapping,
)

__all__ = [
    # Exceptions
    "MaabError",
    "InvalidOrderError",
    "EmptySequenceError",
    "LengthMismatchError",
    "SequenceError",
    # Models
    "ProteinRecord",
    "MotifHit",
    "ScanResult",
    "CompositionStats",
    "MaabResult",
    "MaabClass",
    # Sequence input
    "normalize_sequence",
    "parse_fasta",
    "records_from_columns",
    "records_from_dataframe",
    "records_from_mapping",
    "STANDARD_AA",
    "ALLOWED_AA",
]
