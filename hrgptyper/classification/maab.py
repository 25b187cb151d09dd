"""
MAAB decision rules for hydroxyproline-rich glycoprotein classes.

The MAAB (motif and amino acid bias) pipeline of Johnson et al. (2017)
assigns an HRGP class from nine numbers per sequence: four motif counts
(ext_sp, ext_tyr, prp, agp), four residue class percentages (PAST,
PVYK, PSKY, P) and motif coverage.

Decision procedure
------------------
The published rules are a chain of label rewrites rather than a nested
tree. A sequence starts as "0" and every rule in `MAAB_RULES` is tried in
order; a rule fires when the current label equals its source label (or it
has none) and its condition holds, replacing the label with its target.

1. **Bias**: a sequence is an HRGP candidate when PAST, PVYK or PSKY
   reaches 45% and P reaches 10%. A class that leads both others by at
   least 2 points gives the paired labels 1/4 (PAST), 2/9 (PSKY) or
   3/14 (PVYK); otherwise the label is "Shared".
2. **Motif refinement**: each bias label is split by which motif family
   dominates (ext = ext_sp + ext_tyr, prp, agp/2) and by the SPn to
   tyrosine motif ratio (> 4 or < 0.25).
3. **Coverage**: candidates whose motifs cover less than 15% of the
   sequence end as class 24, whatever was assigned before.

A GPI anchor flag, when available, splits the remaining paired labels
(1/4, 2/9, 3/14) into single classes.

The SPn to tyrosine ratio is undefined without tyrosine motifs; all
ratio conditions are false in that case.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import numpy as np

from ..core.exceptions import LengthMismatchError
from ..core.models import CompositionStats, MaabClass, ScanResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaabThresholds:
    """
    Cut-offs of the MAAB rules. Defaults are the published values.

    Attributes:
        bias_percent: Minimum PAST/PVYK/PSKY percentage for an HRGP
        proline_percent: Minimum proline percentage for an HRGP
        bias_margin: Lead (percentage points) a class needs over the others
        ratio_high: SPn/tyrosine ratio above which extensins are SP-rich
        ratio_low: SPn/tyrosine ratio below which extensins are Tyr-rich
        min_coverage: Motif coverage below which candidates become class 24
    """
    bias_percent: float = 45.0
    proline_percent: float = 10.0
    bias_margin: float = 2.0
    ratio_high: float = 4.0
    ratio_low: float = 0.25
    min_coverage: float = 0.15


@dataclass(frozen=True)
class MaabFeatures:
    """The scalar inputs of the MAAB rules for one sequence."""
    ext_sp: int
    ext_tyr: int
    prp: int
    agp: int
    past_percent: float
    pvyk_percent: float
    psky_percent: float
    p_percent: float
    coverage: float

    @classmethod
    def from_results(
        cls,
        scan_result: ScanResult,
        stats: CompositionStats,
        coverage: float,
    ) -> MaabFeatures:
        return cls(
            ext_sp=scan_result.ext_sp,
            ext_tyr=scan_result.ext_tyr,
            prp=scan_result.prp,
            agp=scan_result.agp,
            past_percent=stats.past_percent,
            pvyk_percent=stats.pvyk_percent,
            psky_percent=stats.psky_percent,
            p_percent=stats.p_percent,
            coverage=coverage,
        )

    @property
    def ext(self) -> int:
        return self.ext_sp + self.ext_tyr

    @property
    def half_agp(self) -> float:
        # AG dipeptides are short, so they are weighted at half
        return self.agp / 2

    @property
    def ext_ratio(self) -> Optional[float]:
        """SPn to tyrosine motif ratio; None when there are no tyrosine motifs."""
        if self.ext_tyr == 0:
            return None
        return self.ext_sp / self.ext_tyr


Condition = Callable[[MaabFeatures, MaabThresholds], bool]


@dataclass(frozen=True)
class MaabRule:
    """
    One label rewrite.

    Attributes:
        target: Label assigned when the rule fires
        condition: Predicate on features and thresholds
        source: Label the sequence must currently carry (None = any)
        description: Human-readable condition
    """
    target: MaabClass
    condition: Condition
    source: Optional[MaabClass] = None
    description: str = ""

    def applies(
        self,
        label: MaabClass,
        features: MaabFeatures,
        thresholds: MaabThresholds,
    ) -> bool:
        if self.source is not None and label is not self.source:
            return False
        return self.condition(features, thresholds)


# =============================================================================
# Rule conditions
# =============================================================================

def is_candidate(f: MaabFeatures, t: MaabThresholds) -> bool:
    """Residue bias and proline content of an HRGP."""
    biased = (
        f.past_percent >= t.bias_percent
        or f.pvyk_percent >= t.bias_percent
        or f.psky_percent >= t.bias_percent
    )
    return biased and f.p_percent >= t.proline_percent


def _leads(value: float, others: tuple[float, float], t: MaabThresholds) -> bool:
    return value >= t.bias_percent and all(value - o >= t.bias_margin for o in others)


def _past_biased(f: MaabFeatures, t: MaabThresholds) -> bool:
    return is_candidate(f, t) and _leads(f.past_percent, (f.pvyk_percent, f.psky_percent), t)


def _psky_biased(f: MaabFeatures, t: MaabThresholds) -> bool:
    return is_candidate(f, t) and _leads(f.psky_percent, (f.past_percent, f.pvyk_percent), t)


def _pvyk_biased(f: MaabFeatures, t: MaabThresholds) -> bool:
    return is_candidate(f, t) and _leads(f.pvyk_percent, (f.past_percent, f.psky_percent), t)


def _ratio_above(f: MaabFeatures, t: MaabThresholds) -> bool:
    ratio = f.ext_ratio
    return ratio is not None and ratio > t.ratio_high


def _ratio_below(f: MaabFeatures, t: MaabThresholds) -> bool:
    ratio = f.ext_ratio
    return ratio is not None and ratio < t.ratio_low


def _agp_dominant(f: MaabFeatures, t: MaabThresholds) -> bool:
    return f.half_agp > f.ext and f.half_agp > f.prp


def _prp_dominant(f: MaabFeatures, t: MaabThresholds) -> bool:
    return f.prp > f.ext and f.prp > f.half_agp


def _ext_dominant(f: MaabFeatures, t: MaabThresholds) -> bool:
    return f.ext >= f.prp and f.ext >= f.half_agp


def _low_coverage(f: MaabFeatures, t: MaabThresholds) -> bool:
    return f.coverage < t.min_coverage and is_candidate(f, t)


M = MaabClass

MAAB_RULES: tuple[MaabRule, ...] = (
    # Residue bias
    MaabRule(M.PAIR_1_4, _past_biased, description="PAST >= 45% and leads PVYK, PSKY by 2"),
    MaabRule(M.PAIR_2_9, _psky_biased, description="PSKY >= 45% and leads PAST, PVYK by 2"),
    MaabRule(M.PAIR_3_14, _pvyk_biased, description="PVYK >= 45% and leads PAST, PSKY by 2"),
    MaabRule(M.SHARED, is_candidate, source=M.UNCLASSIFIED, description="biased, no leading class"),
    # PAST-biased
    MaabRule(M.CLASS_5, lambda f, t: f.half_agp <= f.ext and f.prp <= f.ext,
             source=M.PAIR_1_4, description="agp/2 <= ext and prp <= ext"),
    MaabRule(M.CLASS_6, _ratio_above, source=M.CLASS_5, description="ext_sp/ext_tyr > 4"),
    MaabRule(M.CLASS_7, _ratio_below, source=M.CLASS_5, description="ext_sp/ext_tyr < 0.25"),
    MaabRule(M.CLASS_8, lambda f, t: f.half_agp < f.prp and f.ext < f.prp,
             source=M.PAIR_1_4, description="agp/2 < prp and ext < prp"),
    # PSKY-biased
    MaabRule(M.CLASS_10, _agp_dominant, source=M.PAIR_2_9, description="agp/2 > ext and agp/2 > prp"),
    MaabRule(M.CLASS_13, _prp_dominant, source=M.PAIR_2_9, description="prp > ext and prp > agp/2"),
    MaabRule(M.CLASS_11, _ratio_above, source=M.PAIR_2_9, description="ext_sp/ext_tyr > 4"),
    MaabRule(M.CLASS_12, _ratio_below, source=M.PAIR_2_9, description="ext_sp/ext_tyr < 0.25"),
    # PVYK-biased
    MaabRule(M.CLASS_15, _agp_dominant, source=M.PAIR_3_14, description="agp/2 > prp and agp/2 > ext"),
    MaabRule(M.CLASS_16, _ext_dominant, source=M.PAIR_3_14, description="ext >= prp and ext >= agp/2"),
    MaabRule(M.CLASS_17, _ratio_above, source=M.CLASS_16, description="ext_sp/ext_tyr > 4"),
    MaabRule(M.CLASS_18, _ratio_below, source=M.CLASS_16, description="ext_sp/ext_tyr < 0.25"),
    # Shared
    MaabRule(M.CLASS_19, _agp_dominant, source=M.SHARED, description="agp/2 > ext and agp/2 > prp"),
    MaabRule(M.CLASS_23, _prp_dominant, source=M.SHARED, description="prp > ext and prp > agp/2"),
    MaabRule(M.CLASS_20, _ext_dominant, source=M.SHARED, description="ext >= prp and ext >= agp/2"),
    MaabRule(M.CLASS_21, _ratio_above, source=M.CLASS_20, description="ext_sp/ext_tyr > 4"),
    MaabRule(M.CLASS_22, _ratio_below, source=M.CLASS_20, description="ext_sp/ext_tyr < 0.25"),
    # Applied last, overrides everything above
    MaabRule(M.CLASS_24, _low_coverage, description="candidate with coverage < 0.15"),
)


def check_gpi_flag(flag) -> bool:
    if not isinstance(flag, (bool, np.bool_)):
        raise TypeError(f"GPI flags must be boolean, got {type(flag).__name__}: {flag!r}")
    return bool(flag)


class MaabClassifier:
    """
    Applies the MAAB rule chain.

    Usage:
        >>> classifier = MaabClassifier()
        >>> classifier.predict(features)
        <MaabClass.CLASS_5: '5'>
    """

    def __init__(
        self,
        thresholds: Optional[MaabThresholds] = None,
        rules: Sequence[MaabRule] = MAAB_RULES,
    ):
        self.thresholds = thresholds or MaabThresholds()
        self.rules = tuple(rules)

    def predict(self, features: MaabFeatures) -> MaabClass:
        """Final label of the rule chain, before GPI resolution."""
        label = MaabClass.UNCLASSIFIED
        for rule in self.rules:
            if rule.applies(label, features, self.thresholds):
                label = rule.target
        return label

    def explain(self, features: MaabFeatures) -> list[tuple[MaabRule, MaabClass]]:
        """Rules that fired, with the label each one produced, in order."""
        label = MaabClass.UNCLASSIFIED
        fired = []
        for rule in self.rules:
            if rule.applies(label, features, self.thresholds):
                label = rule.target
                fired.append((rule, label))
        return fired

    def classify(
        self,
        scan_result: ScanResult,
        stats: CompositionStats,
        coverage: float,
        gpi: Optional[bool] = None,
    ) -> MaabClass:
        """
        Classify one sequence from its scan, composition and coverage.

        Args:
            gpi: Optional GPI anchor flag used to resolve paired labels

        Raises:
            TypeError: If gpi is given and is not a boolean
        """
        has_gpi = None if gpi is None else check_gpi_flag(gpi)
        label = self.predict(MaabFeatures.from_results(scan_result, stats, coverage))
        if has_gpi is not None:
            label = label.resolve(has_gpi)
        return label


def predict_maab(
    features: MaabFeatures,
    thresholds: Optional[MaabThresholds] = None,
) -> MaabClass:
    """Apply the MAAB rules to a feature set."""
    return MaabClassifier(thresholds).predict(features)


def classify(
    scan_result: ScanResult,
    stats: CompositionStats,
    coverage: float,
    gpi: Optional[bool] = None,
    thresholds: Optional[MaabThresholds] = None,
) -> MaabClass:
    """Classify one sequence; see `MaabClassifier.classify`."""
    return MaabClassifier(thresholds).classify(scan_result, stats, coverage, gpi)


def resolve_gpi(labels: Sequence[MaabClass], gpi: Sequence[bool]) -> list[MaabClass]:
    """
    Split paired labels with per-sequence GPI flags.

    1/4 becomes 1 (GPI) or 4, 2/9 becomes 9 (GPI) or 2, 3/14 becomes
    14 (GPI) or 3. Other labels are returned unchanged.

    Raises:
        LengthMismatchError: If gpi and labels differ in length
        TypeError: If a flag is not boolean
    """
    if len(gpi) != len(labels):
        raise LengthMismatchError(
            f"gpi must be the same length as the provided sequences "
            f"({len(gpi)} != {len(labels)})"
        )
    flags = [check_gpi_flag(flag) for flag in gpi]

    if labels and not any(label.is_paired for label in labels):
        logger.warning("GPI flags supplied but no sequence carries a paired label")

    return [label.resolve(flag) for label, flag in zip(labels, flags)]
