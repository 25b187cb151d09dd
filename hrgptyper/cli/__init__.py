"""
Command-line interface for hrgptyper.

Usage patterns:
    hrgptyper classify proteome.fasta -o maab.tsv
    hrgptyper scan SPPPPVYKPPVQK
    hrgptyper motifs --order ext,prp,tyr,agp
"""

from .main import cli, main

__all__ = ["cli", "main"]
