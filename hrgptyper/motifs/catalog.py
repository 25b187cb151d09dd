"""
Motif catalog for MAAB classification.

Hydroxyproline-rich glycoproteins (HRGPs) are recognised by short,
repetitive glycomotifs:

- **ext**: extensin Ser-(Pro)3-5 glycomodules
- **tyr**: tyrosine motifs that crosslink extensins
- **prp**: proline-rich protein repeats
- **agp**: arabinogalactan-protein Ala/Ser/Thr/Val/Gly-Pro dipeptides

and by bias towards four overlapping residue classes (PAST, PVYK, PSKY
and P alone). The tables below are process-wide constants compiled once
at import and are safe to share between threads.

References:
    Johnson KL, Cassin AM, Lonsdale A, Bacic A, Doblin MS, Schultz CJ
    (2017) Pipeline to Identify Hydroxyproline-Rich Glycoproteins.
    Plant Physiol 174(2): 886-903.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from ..core.exceptions import InvalidOrderError


@dataclass(frozen=True)
class Motif:
    """A named regular expression over single-letter residue codes."""
    name: str
    pattern: str
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "regex", re.compile(self.pattern))


@dataclass(frozen=True)
class MotifGroup:
    """Ordered motifs counted together as one MAAB feature."""
    name: str
    motifs: tuple[Motif, ...] = ()
    description: str = ""

    @property
    def patterns(self) -> list[str]:
        return [m.pattern for m in self.motifs]


@dataclass(frozen=True)
class ResidueClass:
    """A residue set whose summed percentage enters the bias rules."""
    name: str
    pattern: str

    @property
    def residues(self) -> frozenset:
        return frozenset(self.pattern.split("|"))


MOTIF_CATALOG: dict[str, MotifGroup] = {
    "ext": MotifGroup(
        name="ext",
        motifs=(Motif("ext_sp", "SP{3,5}"),),
        description="Extensin SPn glycomodules",
    ),
    "tyr": MotifGroup(
        name="tyr",
        motifs=(
            Motif("ext_fyxy", "[FY].Y"),
            Motif("ext_khy", "KHY"),
            Motif("ext_vyhkde", "VY[HKDE]"),
            Motif("ext_vxy", "V.Y"),
            Motif("ext_yy", "YY"),
        ),
        description="Extensin tyrosine crosslinking motifs",
    ),
    "prp": MotifGroup(
        name="prp",
        motifs=(
            Motif("prp_ppvxkt", "PPV.[KT]"),
            Motif("prp_ppvqk", "PPV[QK]"),
            Motif("prp_kkpcpp", "KKPCPP"),
        ),
        description="Proline-rich protein repeats",
    ),
    "agp": MotifGroup(
        name="agp",
        motifs=(
            Motif("agp_avtgp", "[AVTG]P{1,3}"),
            Motif("agp_asvtgp", "[ASVTG]P{1,2}"),
        ),
        description="Arabinogalactan-protein glycomodules",
    ),
}

GROUP_NAMES = frozenset(MOTIF_CATALOG)

# Counting order used by Johnson et al. (2017)
DEFAULT_ORDER: tuple[str, ...] = ("ext", "tyr", "prp", "agp")

# Always evaluated in this order, independent of the motif group order
COMPOSITION_CLASSES: tuple[ResidueClass, ...] = (
    ResidueClass("past", "P|A|S|T"),
    ResidueClass("pvyk", "P|V|Y|K"),
    ResidueClass("psky", "P|S|K|Y"),
    ResidueClass("p", "P"),
)


def resolve_order(
    order: Sequence[str] = DEFAULT_ORDER,
    catalog: dict[str, MotifGroup] = MOTIF_CATALOG,
) -> tuple[MotifGroup, ...]:
    """
    Look up motif groups in the requested counting order.

    Args:
        order: A permutation of 'ext', 'tyr', 'prp' and 'agp'
        catalog: Group name -> MotifGroup table

    Returns:
        MotifGroups in the requested order

    Raises:
        InvalidOrderError: If order is not a permutation of the group names
    """
    if isinstance(order, str):
        raise InvalidOrderError(
            "order should be a sequence of four group names, not a string: "
            f"{order!r}"
        )
    try:
        names = list(order)
    except TypeError:
        raise InvalidOrderError(f"order should be a sequence of group names: {order!r}")

    if len(names) != len(GROUP_NAMES):
        raise InvalidOrderError(
            f"order should contain exactly four elements 'ext', 'tyr', 'prp', 'agp'; "
            f"got {len(names)}"
        )
    if not all(isinstance(n, str) for n in names):
        raise InvalidOrderError(f"order elements must be strings: {names!r}")
    if set(names) != GROUP_NAMES:
        raise InvalidOrderError(
            f"order should contain only 'ext', 'tyr', 'prp', 'agp', each once; got {names!r}"
        )
    missing = [n for n in names if n not in catalog]
    if missing:
        raise InvalidOrderError(f"groups not in catalog: {missing}")

    return tuple(catalog[n] for n in names)


def parse_order(text: str) -> tuple[str, ...]:
    """Split a comma-separated order such as 'ext,prp,tyr,agp'."""
    return tuple(part.strip().lower() for part in text.split(",") if part.strip())
