"""
HRGP glycomotifs and ordered, mutually exclusive motif counting.

The catalog defines the four motif groups (ext, tyr, prp, agp) and the
four residue classes used for bias. The scanner counts groups in a chosen
order, masking every counted occurrence so that no residue is counted
twice.
"""

from .catalog import (
    COMPOSITION_CLASSES,
    DEFAULT_ORDER,
    GROUP_NAMES,
    MOTIF_CATALOG,
    Motif,
    MotifGroup,
    ResidueClass,
    parse_order,
    resolve_order,
)
from .scanner import MotifScanner, scan

__all__ = [
    "Motif",
    "MotifGroup",
    "ResidueClass",
    "MOTIF_CATALOG",
    "COMPOSITION_CLASSES",
    "DEFAULT_ORDER",
    "GROUP_NAMES",
    "resolve_order",
    "parse_order",
    "MotifScanner",
    "scan",
]
