"""
hrgptyper: MAAB classification of hydroxyproline-rich glycoproteins.

Hydroxyproline-rich glycoproteins (HRGPs) of the plant cell wall are
recognised by repetitive glycomotifs and a strong bias towards a few
residues. The MAAB (motif and amino acid bias) pipeline of Johnson et al.
(2017) turns both into one of 24 classes:

- Extensins (EXTs): Ser-(Pro)3-5 glycomodules and tyrosine crosslinks
- Proline-rich proteins (PRPs): PPV[QK] and related repeats
- Arabinogalactan-proteins (AGPs): dispersed Ala/Ser/Thr/Val/Gly-Pro
- Chimeric and hybrid HRGPs mixing these modules

Key components:
    - core: Data models, sequence input and normalization, exceptions
    - motifs: Motif catalog and the sequential masking scanner
    - features: Residue class composition and motif coverage
    - classification: MAAB decision rules and GPI resolution
    - pipeline: Batch classification and result tables
    - cli: Command-line interface

Basic usage:
    >>> from hrgptyper import classify_all, to_dataframe
    >>>
    >>> results = classify_all(
    ...     {"EXT1": "SPPPPYYSPPPPKKPSPPPPYYSPPPPVYSPPPPKKPYYSPPPP"},
    ...     group_order=("ext", "tyr", "prp", "agp"),
    ... )
    >>> print(results[0].maab_class.value)

References:
    Johnson KL, Cassin AM, Lonsdale A, Bacic A, Doblin MS, Schultz CJ.
    (2017) Pipeline to Identify Hydroxyproline-Rich Glycoproteins.
    Plant Physiol 174(2): 886-903.

Author: Xenia (ARRIAM)
License: MIT
"""

__version__ = "0.1.0"
__author__ = "Xenia"
__email__ = "xenia@arriam.ru"

from .core.exceptions import (
    EmptySequenceError,
    InvalidOrderError,
    LengthMismatchError,
    MaabError,
)
from .core.models import (
    CompositionStats,
    MaabClass,
    MaabResult,
    MotifHit,
    ProteinRecord,
    ScanResult,
)
from .core.sequence import normalize_sequence, parse_fasta
from .motifs.catalog import COMPOSITION_CLASSES, DEFAULT_ORDER, MOTIF_CATALOG
from .motifs.scanner import MotifScanner, scan
from .features.composition import composition, coverage
from .classification.maab import (
    MaabClassifier,
    MaabFeatures,
    MaabThresholds,
    classify,
    predict_maab,
    resolve_gpi,
)
from .pipeline import classify_all, summarize_classes, to_dataframe
from .export import export_results

__all__ = [
    # Version
    "__version__",
    # Errors
    "MaabError",
    "InvalidOrderError",
    "EmptySequenceError",
    "LengthMismatchError",
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
    # Motifs
    "MOTIF_CATALOG",
    "COMPOSITION_CLASSES",
    "DEFAULT_ORDER",
    "MotifScanner",
    "scan",
    # Features
    "composition",
    "coverage",
    # Classification
    "MaabClassifier",
    "MaabFeatures",
    "MaabThresholds",
    "classify",
    "predict_maab",
    "resolve_gpi",
    # Batch
    "classify_all",
    "to_dataframe",
    "summarize_classes",
    "export_results",
]
