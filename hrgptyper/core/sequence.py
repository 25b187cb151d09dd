"""
Sequence input and normalization for hrgptyper.

The MAAB scanner assumes clean input: uppercase single-letter codes with
no trailing stop marker. This module gets sequences into that shape from
FASTA files, parallel id/sequence vectors, mappings and pandas data
frames.
"""

from __future__ import annotations

import re
from io import StringIO
from pathlib import Path
from typing import Iterable, Iterator, Mapping, Union

from Bio import SeqIO

from .exceptions import LengthMismatchError
from .models import ProteinRecord


# Standard amino acid alphabet
STANDARD_AA = frozenset("ACDEFGHIKLMNPQRSTVWY")

# Ambiguous codes are tolerated; they never match a motif
AMBIGUOUS_AA = frozenset("BXZJUO")

ALLOWED_AA = STANDARD_AA | AMBIGUOUS_AA

_WHITESPACE = re.compile(r"\s+")


class SequenceError(Exception):
    """Exception raised for sequence input errors."""
    pass


def normalize_sequence(sequence: str) -> str:
    """
    Uppercase a sequence, drop whitespace and a trailing stop marker.

    Only a single terminal '*' is removed; internal stops are left in
    place for validation to reject.
    """
    seq = _WHITESPACE.sub("", sequence).upper()
    if seq.endswith("*"):
        seq = seq[:-1]
    return seq


def parse_fasta(source: Union[str, Path, StringIO]) -> Iterator[ProteinRecord]:
    """
    Parse protein sequences from FASTA format.

    Args:
        source: File path, FASTA string, or file-like object

    Yields:
        ProteinRecord objects in file order

    Raises:
        SequenceError: If a record contains invalid characters
    """
    close = False
    if isinstance(source, str) and (source.startswith(">") or "\n>" in source):
        handle = StringIO(source)
    elif isinstance(source, (str, Path)):
        handle = open(source, "r")
        close = True
    else:
        handle = source

    try:
        for record in SeqIO.parse(handle, "fasta"):
            try:
                yield ProteinRecord(
                    id=record.id,
                    name=record.description or None,
                    sequence=str(record.seq),
                )
            except ValueError as e:
                raise SequenceError(f"Sequence '{record.id}' is invalid: {e}") from e
    finally:
        if close:
            handle.close()


def records_from_columns(
    ids: Iterable[str],
    sequences: Iterable[str],
) -> list[ProteinRecord]:
    """
    Pair identifiers with sequences.

    Raises:
        LengthMismatchError: If the two vectors differ in length
    """
    ids = [str(i) for i in ids]
    sequences = [str(s) for s in sequences]
    if len(ids) != len(sequences):
        raise LengthMismatchError(
            f"id and sequence vectors are not of same length "
            f"({len(ids)} != {len(sequences)})"
        )
    return [ProteinRecord(id=i, sequence=s) for i, s in zip(ids, sequences)]


def records_from_mapping(sequences: Mapping[str, str]) -> list[ProteinRecord]:
    """Build records from an id -> sequence mapping, keeping its order."""
    return [ProteinRecord(id=str(k), sequence=v) for k, v in sequences.items()]


def records_from_dataframe(
    data,
    id_column: str,
    sequence_column: str,
) -> list[ProteinRecord]:
    """
    Extract records from two columns of a pandas DataFrame.

    Args:
        data: pandas DataFrame
        id_column: Column with protein identifiers
        sequence_column: Column with amino acid sequences

    Raises:
        KeyError: If either column is missing
    """
    for column, role in ((id_column, "id"), (sequence_column, "sequence")):
        if column not in data.columns:
            raise KeyError(f"specified '{role}' column not found in data: {column}")

    return records_from_columns(
        data[id_column].astype(str).tolist(),
        data[sequence_column].astype(str).tolist(),
    )
