"""
Exceptions raised by the MAAB classification pipeline.

All of these are input-validation failures. Batch operations check their
inputs before any per-sequence work begins, so a raised error never comes
with partial results.
"""


class MaabError(Exception):
    """Base exception for MAAB classification errors."""
    pass


class InvalidOrderError(MaabError, ValueError):
    """Motif group order is not a permutation of ext, tyr, prp and agp."""
    pass


class EmptySequenceError(MaabError, ValueError):
    """A zero-length sequence reached composition or coverage computation."""
    pass


class LengthMismatchError(MaabError, ValueError):
    """Parallel inputs (ids, sequences, GPI flags) do not line up."""
    pass
