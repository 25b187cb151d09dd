"""
Sequential masking motif scanner.

Motif groups are counted one after another in a caller-chosen order.
Every counted occurrence consumes its residues: later patterns, whether
in the same group or a later one, are only searched inside stretches of
the sequence that no earlier pattern has matched. Overlapping candidate
motifs are therefore attributed to whichever pattern was counted first,
which is why MAAB results depend on the counting order (most visibly for
tyr and prp).

Masked positions are tracked as an index mask rather than by rewriting
the sequence, so residue coordinates never shift and nothing inserted
into the sequence can be matched.

Usage:
    >>> scanner = MotifScanner(order=("ext", "prp", "tyr", "agp"))
    >>> result = scanner.scan("SPPPPVYKPPVQK")
    >>> result.group_counts
    {'ext': 1, 'prp': 1, 'tyr': 1, 'agp': 0}
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

from ..core.models import MotifHit, ScanResult
from .catalog import DEFAULT_ORDER, MOTIF_CATALOG, Motif, MotifGroup, resolve_order

logger = logging.getLogger(__name__)


def _unmasked_runs(mask: bytearray) -> Iterator[tuple[int, int]]:
    """Yield (start, end) of maximal runs of unmasked positions."""
    start = None
    for i, consumed in enumerate(mask):
        if consumed:
            if start is not None:
                yield start, i
                start = None
        elif start is None:
            start = i
    if start is not None:
        yield start, len(mask)


class MotifScanner:
    """
    Counts MAAB motifs with mutual exclusion by counting order.

    The scanner holds no per-sequence state and can be shared between
    threads.

    Attributes:
        groups: MotifGroups in counting order
    """

    def __init__(
        self,
        order: Sequence[str] = DEFAULT_ORDER,
        catalog: dict[str, MotifGroup] = MOTIF_CATALOG,
    ):
        """
        Args:
            order: Permutation of 'ext', 'tyr', 'prp', 'agp'
            catalog: Group name -> MotifGroup table

        Raises:
            InvalidOrderError: If order is malformed
        """
        self.groups = resolve_order(order, catalog)

    @property
    def order(self) -> tuple[str, ...]:
        return tuple(g.name for g in self.groups)

    def scan(self, sequence: str) -> ScanResult:
        """
        Count motifs in one sequence.

        Args:
            sequence: Uppercase amino acid sequence

        Returns:
            ScanResult with per-pattern and per-group counts, matched
            lengths and hit positions
        """
        mask = bytearray(len(sequence))
        pattern_counts: dict[str, int] = {}
        group_counts: dict[str, int] = {}
        group_lengths: dict[str, int] = {}
        hits: list[MotifHit] = []

        for group in self.groups:
            group_count = 0
            group_length = 0
            for motif in group.motifs:
                motif_hits = self._find(motif, group.name, sequence, mask)
                for hit in motif_hits:
                    mask[hit.start:hit.end] = b"\x01" * hit.length
                    group_length += hit.length
                pattern_counts[motif.name] = len(motif_hits)
                group_count += len(motif_hits)
                hits.extend(motif_hits)
            group_counts[group.name] = group_count
            group_lengths[group.name] = group_length

        logger.debug(
            f"Scanned {len(sequence)} residues in order {self.order}: {group_counts}"
        )

        return ScanResult(
            sequence_length=len(sequence),
            group_order=self.order,
            pattern_counts=pattern_counts,
            group_counts=group_counts,
            group_lengths=group_lengths,
            hits=hits,
        )

    @staticmethod
    def _find(
        motif: Motif,
        group: str,
        sequence: str,
        mask: bytearray,
    ) -> list[MotifHit]:
        """Non-overlapping matches of one motif inside unmasked stretches."""
        found = []
        for run_start, run_end in _unmasked_runs(mask):
            segment = sequence[run_start:run_end]
            for match in motif.regex.finditer(segment):
                # Empty matches consume nothing and are not counted
                if match.end() == match.start():
                    continue
                found.append(MotifHit(
                    group=group,
                    motif=motif.name,
                    start=run_start + match.start(),
                    end=run_start + match.end(),
                    sequence=match.group(),
                ))
        return found


def scan(sequence: str, group_order: Sequence[str] = DEFAULT_ORDER) -> ScanResult:
    """
    Scan one sequence with the standard motif catalog.

    Raises:
        InvalidOrderError: If group_order is not a permutation of the
            four group names
    """
    return MotifScanner(group_order).scan(sequence)
