#!/usr/bin/env python3
"""
hrgptyper Example: MAAB classification of cell wall glycoproteins

This script walks through the MAAB pipeline on a few short model
sequences: an extensin-like SP4/YY repeat, an arabinogalactan-like
Ala-Pro repeat and a non-HRGP signal peptide. It shows how motif
counting order changes which motif a residue is credited to, and how
GPI predictions split the paired classes.

Run with: python examples/basic_usage.py
"""

from pathlib import Path

from hrgptyper import (
    MaabClassifier,
    MaabFeatures,
    classify_all,
    composition,
    coverage,
    export_results,
    scan,
    summarize_classes,
    to_dataframe,
)


SEQUENCES = {
    "EXT_like": "SPPPPKKPYYSPPPPKKPYY",
    "AGP_like": "APAPAPAPAPDDDDDDDDDD",
    "signal_peptide": "MKWVTFISLLLLFSSAYS",
    "sparse_PAST": "ASTASTKP" * 3,
}


def print_header(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def walk_through_one_sequence():
    """Scan, composition, coverage and rule trace for an extensin repeat."""
    print_header("Extensin-like repeat")

    seq = SEQUENCES["EXT_like"]
    result = scan(seq)
    stats = composition(seq)
    cov = coverage(result, len(seq))

    print(f"\nSequence: {seq} ({len(seq)} aa)")
    print("\nCounted motifs (in counting order):")
    for hit in result.hits:
        print(f"  {hit.group:4s} {hit.motif:12s} {hit.start}-{hit.end}: {hit.sequence}")

    print(f"\nPAST {stats.past_percent:.1f}%  PVYK {stats.pvyk_percent:.1f}%  "
          f"PSKY {stats.psky_percent:.1f}%  P {stats.p_percent:.1f}%")
    print(f"Coverage: {cov:.2f}")

    features = MaabFeatures.from_results(result, stats, cov)
    print("\nRules fired:")
    for rule, label in MaabClassifier().explain(features):
        print(f"  {rule.description} -> {label.value}")


def compare_counting_orders():
    """PPVYK is a tyrosine motif or a PRP repeat depending on order."""
    print_header("Counting order")

    for order in [("ext", "tyr", "prp", "agp"), ("ext", "prp", "tyr", "agp")]:
        result = scan("PPVYK", order)
        print(f"  {','.join(order)}: tyr={result.ext_tyr} prp={result.prp}")


def classify_batch(output_dir: Path):
    """Batch classification with and without GPI predictions."""
    print_header("Batch classification")

    results = classify_all(SEQUENCES)
    print(to_dataframe(results).to_string(index=False))

    gpi = {"EXT_like": False, "AGP_like": True, "signal_peptide": False, "sparse_PAST": False}
    resolved = classify_all(SEQUENCES, gpi=gpi)
    print("\nWith GPI predictions:")
    for row in resolved:
        print(f"  {row.id}: {row.maab_class.value}")

    print(f"\nClass counts: {summarize_classes(resolved)}")

    path = export_results(resolved, output_dir / "maab_results.tsv")
    print(f"Saved to {path}")


def main():
    """Run all examples."""
    print("\n" + "=" * 70)
    print("  hrgptyper Example: MAAB classification")
    print("=" * 70)

    walk_through_one_sequence()
    compare_counting_orders()
    classify_batch(Path("example_output"))

    print("\n" + "=" * 70)
    print("  Example complete!")
    print("=" * 70)
    print("\nNext steps:")
    print("  1. Run 'hrgptyper classify proteome.fasta' on a full proteome")
    print("  2. Add big-PI predictions with --gpi to resolve paired classes")


if __name__ == "__main__":
    main()
