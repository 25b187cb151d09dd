"""
Residue composition and motif coverage descriptors.

Composition is measured on the original, unmasked sequence: the four
residue classes overlap each other (P belongs to all of them) and may
overlap counted motifs. Coverage is the share of the sequence consumed
by counted motifs, which the masking scanner keeps at or below 1.
"""

from __future__ import annotations

import logging

from ..core.exceptions import EmptySequenceError
from ..core.models import CompositionStats, ScanResult
from ..motifs.catalog import COMPOSITION_CLASSES

logger = logging.getLogger(__name__)


def composition(sequence: str) -> CompositionStats:
    """
    Percentages of the PAST, PVYK, PSKY and P residue classes.

    Args:
        sequence: Uppercase amino acid sequence

    Returns:
        CompositionStats with percentages in [0, 100] and the proline count

    Raises:
        EmptySequenceError: If the sequence is empty
    """
    total = len(sequence)
    if total == 0:
        raise EmptySequenceError("cannot compute composition of an empty sequence")

    counts = {}
    for residue_class in COMPOSITION_CLASSES:
        residues = residue_class.residues
        counts[residue_class.name] = sum(1 for aa in sequence if aa in residues)

    return CompositionStats(
        past_percent=counts["past"] / total * 100,
        pvyk_percent=counts["pvyk"] / total * 100,
        psky_percent=counts["psky"] / total * 100,
        p_percent=counts["p"] / total * 100,
        p_count=counts["p"],
    )


def coverage(scan_result: ScanResult, sequence_length: int) -> float:
    """
    Fraction of the sequence covered by counted motifs.

    Args:
        scan_result: Output of the masking scanner
        sequence_length: Length of the scanned sequence

    Raises:
        EmptySequenceError: If sequence_length is zero
    """
    if sequence_length <= 0:
        raise EmptySequenceError("cannot compute coverage of an empty sequence")

    value = scan_result.matched_length / sequence_length
    if value > 1:
        logger.warning(
            f"Motif coverage {value:.3f} exceeds 1; scan result does not "
            f"belong to a sequence of length {sequence_length}"
        )
    return value
