"""
Core data models for hrgptyper.

This module defines the data structures passed between the stages of the
MAAB pipeline: the input protein record, motif hits and scan results from
the masking scanner, residue composition statistics, and the final
per-sequence classification row. Models use Pydantic for validation and
serialization; derived results are frozen once computed.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MaabClass(str, Enum):
    """
    MAAB classes of hydroxyproline-rich glycoproteins (Johnson et al. 2017).

    Three intermediate labels pair two classes that differ only by the
    presence of a GPI anchor:
    - PAIR_1_4: PAST-biased, resolves to 1 (GPI) or 4 (no GPI)
    - PAIR_2_9: PSKY-biased, resolves to 9 (GPI) or 2 (no GPI)
    - PAIR_3_14: PVYK-biased, resolves to 14 (GPI) or 3 (no GPI)

    SHARED marks a biased sequence without a single dominant residue class.
    Classes 5-24 are terminal. UNCLASSIFIED is not an HRGP.
    """
    UNCLASSIFIED = "0"
    PAIR_1_4 = "1/4"
    PAIR_2_9 = "2/9"
    PAIR_3_14 = "3/14"
    SHARED = "Shared"
    CLASS_1 = "1"
    CLASS_2 = "2"
    CLASS_3 = "3"
    CLASS_4 = "4"
    CLASS_5 = "5"
    CLASS_6 = "6"
    CLASS_7 = "7"
    CLASS_8 = "8"
    CLASS_9 = "9"
    CLASS_10 = "10"
    CLASS_11 = "11"
    CLASS_12 = "12"
    CLASS_13 = "13"
    CLASS_14 = "14"
    CLASS_15 = "15"
    CLASS_16 = "16"
    CLASS_17 = "17"
    CLASS_18 = "18"
    CLASS_19 = "19"
    CLASS_20 = "20"
    CLASS_21 = "21"
    CLASS_22 = "22"
    CLASS_23 = "23"
    CLASS_24 = "24"

    @property
    def is_paired(self) -> bool:
        """Whether the label still awaits GPI resolution."""
        return self in (MaabClass.PAIR_1_4, MaabClass.PAIR_2_9, MaabClass.PAIR_3_14)

    def resolve(self, has_gpi: bool) -> MaabClass:
        """Resolve a paired label with a GPI flag; other labels pass through."""
        if self is MaabClass.PAIR_1_4:
            return MaabClass.CLASS_1 if has_gpi else MaabClass.CLASS_4
        if self is MaabClass.PAIR_2_9:
            return MaabClass.CLASS_9 if has_gpi else MaabClass.CLASS_2
        if self is MaabClass.PAIR_3_14:
            return MaabClass.CLASS_14 if has_gpi else MaabClass.CLASS_3
        return self


class ProteinRecord(BaseModel):
    """
    Protein identifier and amino acid sequence.

    The sequence is normalized on construction: uppercased, stripped of
    whitespace and of a trailing stop-codon marker.
    """

    id: str = Field(..., description="Protein identifier")
    name: Optional[str] = Field(None, description="Protein name")
    sequence: str = Field(..., description="Amino acid sequence")

    @property
    def sequence_length(self) -> int:
        """Length of the protein sequence."""
        return len(self.sequence)

    @field_validator("sequence")
    @classmethod
    def validate_sequence(cls, v: str) -> str:
        """Normalize the sequence and reject non amino acid characters."""
        from .sequence import ALLOWED_AA, normalize_sequence

        v = normalize_sequence(v)
        invalid = set(v) - ALLOWED_AA
        if invalid:
            raise ValueError(f"Invalid amino acid characters: {sorted(invalid)}")
        return v


class MotifHit(BaseModel):
    """A counted (and therefore masked) motif occurrence."""
    model_config = ConfigDict(frozen=True)

    group: str = Field(..., description="Motif group name (ext, tyr, prp, agp)")
    motif: str = Field(..., description="Motif column name, e.g. ext_khy")
    start: int = Field(..., ge=0, description="0-indexed start position (inclusive)")
    end: int = Field(..., ge=0, description="0-indexed end position (exclusive)")
    sequence: str = Field(..., min_length=1, description="Matched residues")

    @field_validator("end")
    @classmethod
    def end_after_start(cls, v: int, info) -> int:
        if "start" in info.data and v <= info.data["start"]:
            raise ValueError("end must be greater than start")
        return v

    @property
    def length(self) -> int:
        """Length of the hit in residues."""
        return self.end - self.start


class ScanResult(BaseModel):
    """
    Motif counts for one sequence after sequential masking.

    Group totals are keyed by group name, per-pattern counts by motif
    column name. `group_lengths` holds the number of residues consumed by
    each group's hits.
    """
    model_config = ConfigDict(frozen=True)

    sequence_length: int = Field(..., ge=0)
    group_order: tuple[str, ...]
    pattern_counts: dict[str, int] = Field(default_factory=dict)
    group_counts: dict[str, int] = Field(default_factory=dict)
    group_lengths: dict[str, int] = Field(default_factory=dict)
    hits: list[MotifHit] = Field(default_factory=list)

    @property
    def ext_sp(self) -> int:
        return self.group_counts.get("ext", 0)

    @property
    def ext_tyr(self) -> int:
        return self.group_counts.get("tyr", 0)

    @property
    def prp(self) -> int:
        return self.group_counts.get("prp", 0)

    @property
    def agp(self) -> int:
        return self.group_counts.get("agp", 0)

    @property
    def ext(self) -> int:
        """Combined extensin count: SPn motifs plus tyrosine motifs."""
        return self.ext_sp + self.ext_tyr

    @property
    def matched_length(self) -> int:
        """Total residues covered by counted motifs across all groups."""
        return sum(self.group_lengths.values())


class CompositionStats(BaseModel):
    """Residue class percentages of an unmasked sequence."""
    model_config = ConfigDict(frozen=True)

    past_percent: float = Field(..., ge=0, le=100)
    pvyk_percent: float = Field(..., ge=0, le=100)
    psky_percent: float = Field(..., ge=0, le=100)
    p_percent: float = Field(..., ge=0, le=100)
    p_count: int = Field(..., ge=0, description="Raw proline count")


class MaabResult(BaseModel):
    """
    One row of the MAAB output table.

    Column names follow the published MAAB output so tables can be
    compared directly.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    ext_sp: int = Field(..., ge=0, description="SP{3,5} motifs")
    ext_tyr: int = Field(..., ge=0, description="Tyrosine crosslinking motifs")
    prp: int = Field(..., ge=0, description="Proline-rich protein motifs")
    agp: int = Field(..., ge=0, description="Arabinogalactan motifs")
    past_percent: float
    pvyk_percent: float
    psky_percent: float
    p_percent: float
    coverage: float = Field(..., ge=0)
    maab_class: MaabClass

    def as_row(self) -> dict:
        """Flat dict with the class label as a plain string."""
        row = self.model_dump()
        row["maab_class"] = self.maab_class.value
        return row
