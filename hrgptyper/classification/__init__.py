"""
MAAB classification of hydroxyproline-rich glycoproteins.

The rules of Johnson et al. (2017) form an ordered chain of label
rewrites over motif counts, residue class percentages and coverage.
Paired labels (1/4, 2/9, 3/14) are split with GPI anchor predictions
when available.
"""

from .maab import (
    MAAB_RULES,
    MaabClassifier,
    MaabFeatures,
    MaabRule,
    MaabThresholds,
    check_gpi_flag,
    classify,
    is_candidate,
    predict_maab,
    resolve_gpi,
)

__all__ = [
    # Configuration
    "MaabThresholds",
    # Rules
    "MaabFeatures",
    "MaabRule",
    "MAAB_RULES",
    "is_candidate",
    # Classifier
    "MaabClassifier",
    "predict_maab",
    "classify",
    "resolve_gpi",
    "check_gpi_flag",
]
