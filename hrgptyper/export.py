"""
Export of MAAB result tables.

Tables carry one row per sequence with the published MAAB columns
(id, motif counts, residue class percentages, coverage, maab_class) so
they can be compared against reference outputs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

from .core.models import MaabResult
from .pipeline import to_dataframe

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("tsv", "csv", "json")


def export_results(
    results: Sequence[MaabResult],
    filepath: Union[str, Path],
    fmt: str = "tsv",
) -> Path:
    """
    Write MAAB results to disk.

    Args:
        results: MaabResult rows
        filepath: Output file path; parent directories are created
        fmt: 'tsv', 'csv' or 'json' (list of records)

    Returns:
        Path to the written file
    """
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"Unknown export format: {fmt} (expected one of {EXPORT_FORMATS})")

    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df = to_dataframe(results)
    if fmt == "json":
        df.to_json(filepath, orient="records", indent=2)
    else:
        df.to_csv(filepath, sep="\t" if fmt == "tsv" else ",", index=False)

    logger.info(f"Exported {len(df)} MAAB results to {filepath}")
    return filepath
