"""
Tests for the MAAB motif catalog and group order validation.

The counting order changes results, so every permutation of the four
groups must be accepted and anything else rejected before scanning.
"""

from itertools import permutations

import pytest

from hrgptyper.core.exceptions import InvalidOrderError, MaabError
from hrgptyper.motifs.catalog import (
    COMPOSITION_CLASSES,
    DEFAULT_ORDER,
    GROUP_NAMES,
    MOTIF_CATALOG,
    parse_order,
    resolve_order,
)


class TestMotifCatalog:
    """The published motif patterns must be reproduced exactly."""

    def test_group_names(self):
        assert GROUP_NAMES == {"ext", "tyr", "prp", "agp"}

    def test_default_order(self):
        assert DEFAULT_ORDER == ("ext", "tyr", "prp", "agp")

    @pytest.mark.parametrize("group,patterns", [
        ("ext", ["SP{3,5}"]),
        ("tyr", ["[FY].Y", "KHY", "VY[HKDE]", "V.Y", "YY"]),
        ("prp", ["PPV.[KT]", "PPV[QK]", "KKPCPP"]),
        ("agp", ["[AVTG]P{1,3}", "[ASVTG]P{1,2}"]),
    ])
    def test_patterns(self, group, patterns):
        assert MOTIF_CATALOG[group].patterns == patterns

    def test_motif_names_are_unique(self):
        names = [m.name for g in MOTIF_CATALOG.values() for m in g.motifs]
        assert len(names) == len(set(names)) == 11

    def test_regex_compiled_once(self):
        motif = MOTIF_CATALOG["ext"].motifs[0]
        assert motif.regex.pattern == "SP{3,5}"
        assert motif.regex is MOTIF_CATALOG["ext"].motifs[0].regex


class TestCompositionClasses:
    """Residue classes are fixed and always evaluated in the same order."""

    def test_order_and_patterns(self):
        assert [(c.name, c.pattern) for c in COMPOSITION_CLASSES] == [
            ("past", "P|A|S|T"),
            ("pvyk", "P|V|Y|K"),
            ("psky", "P|S|K|Y"),
            ("p", "P"),
        ]

    def test_residue_sets(self):
        past = COMPOSITION_CLASSES[0]
        assert past.residues == frozenset("PAST")


class TestResolveOrder:
    """Order must be a bijection over the four group names."""

    @pytest.mark.parametrize("order", list(permutations(DEFAULT_ORDER)))
    def test_all_permutations_accepted(self, order):
        groups = resolve_order(order)
        assert tuple(g.name for g in groups) == order

    def test_list_accepted(self):
        groups = resolve_order(["ext", "prp", "tyr", "agp"])
        assert [g.name for g in groups] == ["ext", "prp", "tyr", "agp"]

    @pytest.mark.parametrize("order", [
        ("ext", "tyr", "prp"),
        ("ext", "tyr", "prp", "agp", "ext"),
        ("ext", "tyr", "prp", "prp"),
        ("ext", "tyr", "prp", "xyz"),
        ("EXT", "TYR", "PRP", "AGP"),
        (1, 2, 3, 4),
        (),
        "ext",
        "exttyrprpagp",
        None,
    ])
    def test_invalid_orders_rejected(self, order):
        with pytest.raises(InvalidOrderError):
            resolve_order(order)

    def test_error_hierarchy(self):
        assert issubclass(InvalidOrderError, MaabError)
        assert issubclass(InvalidOrderError, ValueError)


class TestParseOrder:

    def test_comma_separated(self):
        assert parse_order("ext,prp,tyr,agp") == ("ext", "prp", "tyr", "agp")

    def test_whitespace_and_case(self):
        assert parse_order(" ext, PRP ,tyr,agp ") == ("ext", "prp", "tyr", "agp")

    def test_parsed_order_still_validated(self):
        with pytest.raises(InvalidOrderError):
            resolve_order(parse_order("ext,tyr"))
