"""
Tests for the MAAB decision rules and GPI resolution.

Rule tests build MaabFeatures directly so that every branch of the rule
chain can be reached with exact numbers, independent of the scanner.
"""

import numpy as np
import pytest

from hrgptyper.classification.maab import (
    MAAB_RULES,
    MaabClassifier,
    MaabFeatures,
    MaabThresholds,
    check_gpi_flag,
    classify,
    is_candidate,
    predict_maab,
    resolve_gpi,
)
from hrgptyper.core.exceptions import LengthMismatchError, MaabError
from hrgptyper.core.models import MaabClass
from hrgptyper.features.composition import composition, coverage
from hrgptyper.motifs.scanner import scan


# Residue class profiles (past, pvyk, psky, p)
PAST_BIASED = dict(past_percent=60.0, pvyk_percent=20.0, psky_percent=30.0, p_percent=15.0)
PSKY_BIASED = dict(past_percent=30.0, pvyk_percent=30.0, psky_percent=60.0, p_percent=15.0)
PVYK_BIASED = dict(past_percent=30.0, pvyk_percent=60.0, psky_percent=30.0, p_percent=15.0)
SHARED = dict(past_percent=50.0, pvyk_percent=49.0, psky_percent=49.0, p_percent=15.0)


def make_features(profile=None, ext_sp=0, ext_tyr=0, prp=0, agp=0, coverage=0.5):
    profile = profile or PAST_BIASED
    return MaabFeatures(
        ext_sp=ext_sp,
        ext_tyr=ext_tyr,
        prp=prp,
        agp=agp,
        coverage=coverage,
        **profile,
    )


def label(features, **kwargs):
    return predict_maab(features, **kwargs).value


class TestFeatures:

    def test_ext_sum(self):
        assert make_features(ext_sp=3, ext_tyr=2).ext == 5

    def test_half_agp(self):
        assert make_features(agp=5).half_agp == 2.5

    def test_ratio(self):
        assert make_features(ext_sp=10, ext_tyr=2).ext_ratio == 5.0

    def test_ratio_undefined_without_tyrosine(self):
        assert make_features(ext_sp=10, ext_tyr=0).ext_ratio is None

    def test_from_results(self):
        seq = "SPPPPKKPYYSPPPPKKPYY"
        result = scan(seq)
        features = MaabFeatures.from_results(result, composition(seq), coverage(result, len(seq)))
        assert (features.ext_sp, features.ext_tyr, features.prp, features.agp) == (2, 2, 0, 0)
        assert features.coverage == pytest.approx(0.7)


class TestCandidate:
    """Bias and proline thresholds that make a sequence an HRGP."""

    def test_not_biased(self):
        profile = dict(past_percent=40.0, pvyk_percent=40.0, psky_percent=40.0, p_percent=20.0)
        assert label(make_features(profile)) == "0"

    def test_too_little_proline(self):
        profile = dict(PAST_BIASED, p_percent=9.9)
        assert label(make_features(profile)) == "0"

    def test_thresholds_inclusive(self):
        """45%, 10% and the 2 point margin are all inclusive."""
        profile = dict(past_percent=45.0, pvyk_percent=43.0, psky_percent=43.0, p_percent=10.0)
        features = make_features(profile, agp=10)
        assert is_candidate(features, MaabThresholds())
        assert label(features) == "1/4"

    def test_below_margin_is_shared(self):
        profile = dict(past_percent=50.0, pvyk_percent=48.5, psky_percent=20.0, p_percent=15.0)
        assert label(make_features(profile, agp=10)) == "19"

    def test_non_candidate_ignores_coverage(self):
        profile = dict(PAST_BIASED, p_percent=5.0)
        assert label(make_features(profile, coverage=0.0)) == "0"


class TestPastBiased:

    def test_stays_paired(self):
        assert label(make_features(PAST_BIASED, agp=10)) == "1/4"

    def test_class_5(self):
        assert label(make_features(PAST_BIASED, ext_sp=2, ext_tyr=2, prp=1, agp=4)) == "5"

    def test_class_6(self):
        assert label(make_features(PAST_BIASED, ext_sp=10, ext_tyr=2, agp=4)) == "6"

    def test_class_7(self):
        assert label(make_features(PAST_BIASED, ext_sp=1, ext_tyr=5)) == "7"

    def test_ratio_undefined_stays_5(self):
        assert label(make_features(PAST_BIASED, ext_sp=5)) == "5"

    def test_class_8(self):
        assert label(make_features(PAST_BIASED, ext_sp=1, prp=5, agp=2)) == "8"

    def test_no_motifs_is_5(self):
        """With no motifs at all, ext (0) ties prp and agp/2."""
        assert label(make_features(PAST_BIASED, coverage=0.5)) == "5"


class TestPskyBiased:

    def test_stays_paired(self):
        assert label(make_features(PSKY_BIASED, ext_sp=2, ext_tyr=2)) == "2/9"

    def test_class_10(self):
        assert label(make_features(PSKY_BIASED, ext_sp=1, prp=1, agp=10)) == "10"

    def test_class_13(self):
        assert label(make_features(PSKY_BIASED, ext_sp=1, prp=5, agp=2)) == "13"

    def test_class_11(self):
        assert label(make_features(PSKY_BIASED, ext_sp=5, ext_tyr=1)) == "11"

    def test_class_12(self):
        assert label(make_features(PSKY_BIASED, ext_sp=1, ext_tyr=5)) == "12"

    def test_agp_rule_precedes_ratio(self):
        """AGP dominance and a high ratio both hold; class 10 wins."""
        features = make_features(PSKY_BIASED, ext_sp=5, ext_tyr=1, agp=20)
        assert features.ext_ratio > 4
        assert label(features) == "10"


class TestPvykBiased:

    def test_class_15(self):
        assert label(make_features(PVYK_BIASED, agp=10)) == "15"

    def test_class_16(self):
        assert label(make_features(PVYK_BIASED, ext_sp=2, ext_tyr=2)) == "16"

    def test_class_17(self):
        assert label(make_features(PVYK_BIASED, ext_sp=10, ext_tyr=2)) == "17"

    def test_class_18(self):
        assert label(make_features(PVYK_BIASED, ext_sp=1, ext_tyr=5)) == "18"

    def test_stays_paired(self):
        assert label(make_features(PVYK_BIASED, prp=5, agp=2)) == "3/14"


class TestShared:

    def test_class_19(self):
        assert label(make_features(SHARED, agp=10)) == "19"

    def test_class_23(self):
        assert label(make_features(SHARED, ext_sp=1, prp=5, agp=2)) == "23"

    def test_class_20(self):
        assert label(make_features(SHARED, ext_sp=2, ext_tyr=2)) == "20"

    def test_class_21(self):
        assert label(make_features(SHARED, ext_sp=10, ext_tyr=2)) == "21"

    def test_class_22(self):
        assert label(make_features(SHARED, ext_sp=1, ext_tyr=5)) == "22"

    def test_stays_shared_on_ties(self):
        assert label(make_features(SHARED, prp=2, agp=4)) == "Shared"


class TestCoverageOverride:
    """Candidates with sparse motifs end as class 24."""

    def test_overrides_refined_class(self):
        features = make_features(PAST_BIASED, ext_sp=10, ext_tyr=2, coverage=0.1)
        assert label(features) == "24"

    def test_overrides_paired_label(self):
        assert label(make_features(PSKY_BIASED, coverage=0.0)) == "24"

    def test_boundary_not_overridden(self):
        features = make_features(PAST_BIASED, ext_sp=2, ext_tyr=2, coverage=0.15)
        assert label(features) == "5"

    def test_custom_threshold(self):
        features = make_features(PAST_BIASED, ext_sp=2, ext_tyr=2, coverage=0.1)
        assert label(features, thresholds=MaabThresholds(min_coverage=0.05)) == "5"


class TestClassifier:

    def test_rule_table(self):
        assert len(MAAB_RULES) == 22
        assert MAAB_RULES[-1].target is MaabClass.CLASS_24
        assert all(rule.description for rule in MAAB_RULES)

    def test_deterministic(self):
        classifier = MaabClassifier()
        features = make_features(SHARED, ext_sp=10, ext_tyr=2)
        assert classifier.predict(features) == classifier.predict(features)

    def test_explain(self):
        features = make_features(PAST_BIASED, ext_sp=10, ext_tyr=2, agp=4)
        fired = MaabClassifier().explain(features)
        assert [produced.value for _, produced in fired] == ["1/4", "5", "6"]

    def test_explain_nothing_fires(self):
        profile = dict(past_percent=10.0, pvyk_percent=10.0, psky_percent=10.0, p_percent=1.0)
        assert MaabClassifier().explain(make_features(profile)) == []

    def test_classify_from_scan(self):
        seq = "SPPPPKKPYYSPPPPKKPYY"
        result = scan(seq)
        stats = composition(seq)
        cov = coverage(result, len(seq))
        assert classify(result, stats, cov) is MaabClass.PAIR_2_9
        assert classify(result, stats, cov, gpi=False) is MaabClass.CLASS_2
        assert classify(result, stats, cov, gpi=True) is MaabClass.CLASS_9

    def test_classify_rejects_non_bool_gpi(self):
        seq = "SPPPPKKPYYSPPPPKKPYY"
        result = scan(seq)
        with pytest.raises(TypeError):
            classify(result, composition(seq), coverage(result, len(seq)), gpi="yes")


class TestMaabClass:

    def test_paired(self):
        assert MaabClass.PAIR_1_4.is_paired
        assert MaabClass.PAIR_2_9.is_paired
        assert MaabClass.PAIR_3_14.is_paired
        assert not MaabClass.SHARED.is_paired
        assert not MaabClass.CLASS_5.is_paired

    def test_string_values(self):
        assert MaabClass("3/14") is MaabClass.PAIR_3_14
        assert MaabClass.CLASS_24 == "24"


class TestResolveGpi:
    """Paired labels are split by GPI anchor presence."""

    def test_with_gpi(self):
        labels = [MaabClass.PAIR_1_4, MaabClass.PAIR_2_9, MaabClass.PAIR_3_14]
        assert [x.value for x in resolve_gpi(labels, [True, True, True])] == ["1", "9", "14"]

    def test_without_gpi(self):
        labels = [MaabClass.PAIR_1_4, MaabClass.PAIR_2_9, MaabClass.PAIR_3_14]
        assert [x.value for x in resolve_gpi(labels, [False, False, False])] == ["4", "2", "3"]

    def test_other_labels_unchanged(self):
        labels = [MaabClass.CLASS_5, MaabClass.SHARED, MaabClass.UNCLASSIFIED, MaabClass.CLASS_24]
        assert resolve_gpi(labels, [True, False, True, False]) == labels

    def test_numpy_bools_accepted(self):
        flags = np.array([True, False])
        resolved = resolve_gpi([MaabClass.PAIR_1_4, MaabClass.PAIR_1_4], list(flags))
        assert [x.value for x in resolved] == ["1", "4"]

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            resolve_gpi([MaabClass.PAIR_1_4], [True, False])

    def test_length_mismatch_is_maab_error(self):
        assert issubclass(LengthMismatchError, MaabError)

    @pytest.mark.parametrize("flag", [1, 0, "TRUE", None, 1.0])
    def test_non_boolean_rejected(self, flag):
        with pytest.raises(TypeError):
            resolve_gpi([MaabClass.PAIR_1_4], [flag])

    def test_warns_without_paired_labels(self, caplog):
        with caplog.at_level("WARNING"):
            resolve_gpi([MaabClass.CLASS_5], [True])
        assert "no sequence carries a paired label" in caplog.text

    def test_check_flag(self):
        assert check_gpi_flag(np.bool_(True)) is True
        assert check_gpi_flag(False) is False
