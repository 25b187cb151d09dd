"""
Sequence descriptors for MAAB classification.

- Residue class composition (PAST, PVYK, PSKY, P) on the unmasked sequence
- Motif coverage: share of the sequence consumed by counted motifs
"""

from .composition import composition, coverage

__all__ = ["composition", "coverage"]
