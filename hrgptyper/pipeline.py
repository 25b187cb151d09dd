"""
Batch MAAB classification.

Runs the full pipeline over many sequences: masking motif scan,
composition, coverage and the MAAB rules, followed by optional GPI
resolution. Sequences are independent of each other, so the batch can be
spread across worker threads; results always come back in input order.

All inputs are validated before the first sequence is processed. A
malformed group order, an empty sequence or GPI flags that do not line
up with the sequences raise without producing partial results.

Usage:
    >>> results = classify_all({"AGP1": "MEAAAPAPSPASPAPSP..."})
    >>> df = to_dataframe(results)
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Mapping, Optional, Sequence, Union

import pandas as pd

from .classification.maab import (
    MaabClassifier,
    MaabFeatures,
    MaabThresholds,
    check_gpi_flag,
    resolve_gpi,
)
from .core.exceptions import EmptySequenceError, LengthMismatchError
from .core.models import MaabResult, ProteinRecord
from .core.sequence import records_from_mapping
from .features.composition import composition, coverage
from .motifs.catalog import DEFAULT_ORDER
from .motifs.scanner import MotifScanner

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "id",
    "ext_sp",
    "ext_tyr",
    "prp",
    "agp",
    "past_percent",
    "pvyk_percent",
    "psky_percent",
    "p_percent",
    "coverage",
    "maab_class",
]

SequenceInput = Union[Mapping[str, str], Iterable[ProteinRecord]]
GpiInput = Union[Mapping[str, bool], Sequence[bool]]


def classify_record(
    record: ProteinRecord,
    scanner: MotifScanner,
    classifier: MaabClassifier,
) -> MaabResult:
    """
    Classify one record without GPI resolution.

    Raises:
        EmptySequenceError: If the record has no residues
    """
    sequence = record.sequence
    scan_result = scanner.scan(sequence)
    stats = composition(sequence)
    cov = coverage(scan_result, len(sequence))
    features = MaabFeatures.from_results(scan_result, stats, cov)
    label = classifier.predict(features)

    logger.debug(f"{record.id}: {features} -> {label.value}")

    return MaabResult(
        id=record.id,
        ext_sp=features.ext_sp,
        ext_tyr=features.ext_tyr,
        prp=features.prp,
        agp=features.agp,
        past_percent=features.past_percent,
        pvyk_percent=features.pvyk_percent,
        psky_percent=features.psky_percent,
        p_percent=features.p_percent,
        coverage=features.coverage,
        maab_class=label,
    )


def _as_records(sequences: SequenceInput) -> list[ProteinRecord]:
    if isinstance(sequences, Mapping):
        return records_from_mapping(sequences)
    records = list(sequences)
    for record in records:
        if not isinstance(record, ProteinRecord):
            raise TypeError(
                f"expected a mapping of id -> sequence or ProteinRecord objects, "
                f"got {type(record).__name__}"
            )
    return records


def _gpi_flags(records: list[ProteinRecord], gpi: GpiInput) -> list:
    """Align GPI flags with records; fails on missing or extra entries."""
    if isinstance(gpi, Mapping):
        ids = [r.id for r in records]
        missing = [i for i in ids if i not in gpi]
        extra = sorted(set(gpi) - set(ids))
        if missing or extra or len(gpi) != len(ids):
            raise LengthMismatchError(
                f"gpi must cover exactly the provided identifiers "
                f"(missing: {missing[:5]}, unexpected: {extra[:5]})"
            )
        return [gpi[i] for i in ids]

    flags = list(gpi)
    if len(flags) != len(records):
        raise LengthMismatchError(
            f"gpi must be the same length as the provided sequences "
            f"({len(flags)} != {len(records)})"
        )
    return flags


def classify_all(
    sequences: SequenceInput,
    group_order: Sequence[str] = DEFAULT_ORDER,
    gpi: Optional[GpiInput] = None,
    thresholds: Optional[MaabThresholds] = None,
    max_workers: int = 0,
) -> list[MaabResult]:
    """
    Classify many sequences with the MAAB pipeline.

    Args:
        sequences: Mapping of id -> sequence, or ProteinRecord objects
        group_order: Motif counting order, a permutation of
            'ext', 'tyr', 'prp', 'agp'
        gpi: Optional GPI flags, as a mapping of id -> bool covering every
            identifier or a sequence of bools in input order
        thresholds: Custom rule cut-offs (published values by default)
        max_workers: Worker threads; 0 runs sequentially

    Returns:
        One MaabResult per input sequence, in input order

    Raises:
        InvalidOrderError: If group_order is malformed
        EmptySequenceError: If any sequence is empty
        LengthMismatchError: If gpi does not line up with the sequences
        TypeError: If a GPI flag is not boolean
    """
    scanner = MotifScanner(group_order)
    classifier = MaabClassifier(thresholds)
    records = _as_records(sequences)

    empty = [r.id for r in records if not r.sequence]
    if empty:
        raise EmptySequenceError(f"empty sequences: {empty[:5]}")

    flags = None
    if gpi is not None:
        flags = [check_gpi_flag(flag) for flag in _gpi_flags(records, gpi)]

    if max_workers > 0:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(
                lambda r: classify_record(r, scanner, classifier), records
            ))
    else:
        results = [classify_record(r, scanner, classifier) for r in records]

    if flags is not None:
        labels = resolve_gpi([r.maab_class for r in results], flags)
        results = [
            r.model_copy(update={"maab_class": label})
            for r, label in zip(results, labels)
        ]

    logger.info(
        f"Classified {len(results)} sequences in order {scanner.order}"
        f"{' with GPI flags' if flags is not None else ''}"
    )
    return results


def to_dataframe(results: Sequence[MaabResult]) -> pd.DataFrame:
    """MAAB results as a pandas DataFrame with the published columns."""
    return pd.DataFrame([r.as_row() for r in results], columns=RESULT_COLUMNS)


def summarize_classes(results: Sequence[MaabResult]) -> dict[str, int]:
    """Number of sequences per MAAB class, most frequent first."""
    if not results:
        return {}
    counts = to_dataframe(results)["maab_class"].value_counts()
    return {str(k): int(v) for k, v in counts.items()}
