"""
hrgptyper Command Line Interface.

Runs MAAB classification of hydroxyproline-rich glycoproteins from the
shell. Built with Click, with Rich for tables and progress.

Usage:
    hrgptyper classify proteome.fasta -o maab.tsv
    hrgptyper classify proteome.fasta --order ext,prp,tyr,agp --gpi bigpi.tsv
    hrgptyper scan SPPPPVYKPPVQKSPPPP
    hrgptyper motifs
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .. import __version__
from ..classification.maab import MaabClassifier, MaabFeatures
from ..core.exceptions import MaabError
from ..core.sequence import SequenceError, normalize_sequence, parse_fasta
from ..export import EXPORT_FORMATS, export_results
from ..features.composition import composition, coverage
from ..motifs.catalog import COMPOSITION_CLASSES, DEFAULT_ORDER, parse_order, resolve_order
from ..motifs.scanner import MotifScanner
from ..pipeline import classify_all, summarize_classes

console = Console()

ORDER_HELP = "Motif counting order, comma separated (default: ext,tyr,prp,agp)"


def load_gpi_table(path: Path, id_column: str, flag_column: str) -> dict[str, bool]:
    """
    Read GPI flags from a csv/tsv prediction table.

    Flag values may be booleans or the strings true/false (any case).
    """
    import pandas as pd

    sep = "\t" if path.suffix.lower() in (".tsv", ".tab", ".txt") else ","
    table = pd.read_csv(path, sep=sep)
    for column in (id_column, flag_column):
        if column not in table.columns:
            raise click.BadParameter(f"column '{column}' not found in {path}")

    flags = {}
    for seq_id, value in zip(table[id_column].astype(str), table[flag_column]):
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered not in ("true", "false"):
                raise TypeError(f"GPI flag for {seq_id} is not boolean: {value!r}")
            value = lowered == "true"
        flags[seq_id] = value
    return flags


@click.group()
@click.version_option(version=__version__, prog_name="hrgptyper")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool):
    """
    hrgptyper: MAAB classification of hydroxyproline-rich glycoproteins.

    \b
    • Ordered, mutually exclusive motif counting (ext, tyr, prp, agp)
    • PAST / PVYK / PSKY / P composition bias
    • MAAB classes 1-24 (Johnson et al. 2017)

    Run 'hrgptyper COMMAND --help' for command-specific help.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


@cli.command("classify")
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default="maab_results.tsv",
    help="Output table path",
)
@click.option("--order", default=",".join(DEFAULT_ORDER), help=ORDER_HELP)
@click.option(
    "--gpi",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="csv/tsv table with GPI predictions for every input id",
)
@click.option("--gpi-id-column", default="id", help="Identifier column of the GPI table")
@click.option("--gpi-column", default="is_bigpi", help="Boolean column of the GPI table")
@click.option(
    "--format", "-f", "fmt",
    type=click.Choice(EXPORT_FORMATS),
    default="tsv",
    help="Output format",
)
@click.option("--workers", type=int, default=0, help="Worker threads (0 = sequential)")
@click.pass_context
def classify_cmd(
    ctx,
    input_file: str,
    output: str,
    order: str,
    gpi: Optional[str],
    gpi_id_column: str,
    gpi_column: str,
    fmt: str,
    workers: int,
):
    """
    Classify protein sequences from a FASTA file.

    \b
    Examples:
        hrgptyper classify proteome.fasta
        hrgptyper classify proteome.fasta --order ext,prp,tyr,agp -f csv -o maab.csv
        hrgptyper classify proteome.fasta --gpi bigpi.tsv --gpi-column is_bigpi
    """
    quiet = ctx.obj.get("quiet")
    input_path = Path(input_file)

    try:
        records = list(parse_fasta(input_path))
        gpi_flags = None
        if gpi:
            gpi_flags = load_gpi_table(Path(gpi), gpi_id_column, gpi_column)

        if not quiet:
            console.print(f"[green]✓[/green] Loaded {len(records)} sequence(s) from {input_path}")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            disable=quiet,
        ) as progress:
            task = progress.add_task("Classifying...", total=None)
            results = classify_all(
                records,
                group_order=parse_order(order),
                gpi=gpi_flags,
                max_workers=workers,
            )
            progress.update(task, completed=True)

        path = export_results(results, output, fmt)
    except (MaabError, SequenceError, TypeError, OSError) as e:
        console.print(f"[red]✗ Classification failed:[/red] {e}")
        sys.exit(1)

    if quiet:
        return

    console.print(f"[green]✓[/green] Results saved to: {path}")

    table = Table(title="MAAB classes", show_header=True, header_style="bold cyan")
    table.add_column("Class", style="bold")
    table.add_column("Sequences", justify="right")
    for label, count in summarize_classes(results).items():
        table.add_row(label, str(count))
    console.print(table)


@cli.command("scan")
@click.argument("sequence")
@click.option("--order", default=",".join(DEFAULT_ORDER), help=ORDER_HELP)
@click.option("--gpi/--no-gpi", default=None, help="GPI anchor present (resolves paired classes)")
def scan_cmd(sequence: str, order: str, gpi: Optional[bool]):
    """
    Show motif counts, composition and MAAB class for one sequence.

    \b
    Examples:
        hrgptyper scan SPPPPVYKPPVQKSPPPP
        hrgptyper scan SPPPPVYKPPVQKSPPPP --order ext,prp,tyr,agp --gpi
    """
    seq = normalize_sequence(sequence)
    try:
        scanner = MotifScanner(parse_order(order))
        scan_result = scanner.scan(seq)
        stats = composition(seq)
        cov = coverage(scan_result, len(seq))
    except MaabError as e:
        console.print(f"[red]✗ Scan failed:[/red] {e}")
        sys.exit(1)

    classifier = MaabClassifier()
    features = MaabFeatures.from_results(scan_result, stats, cov)
    label = classifier.classify(scan_result, stats, cov, gpi=gpi)

    console.print(f"\nSequence: {seq[:50]}{'...' if len(seq) > 50 else ''} ({len(seq)} aa)")

    motif_table = Table(title="Motif counts", show_header=True, header_style="bold cyan")
    motif_table.add_column("Group")
    motif_table.add_column("Motif")
    motif_table.add_column("Count", justify="right")
    for group in scanner.groups:
        for motif in group.motifs:
            motif_table.add_row(group.name, motif.name, str(scan_result.pattern_counts[motif.name]))
    console.print(motif_table)

    console.print(
        f"past {stats.past_percent:.1f}%  pvyk {stats.pvyk_percent:.1f}%  "
        f"psky {stats.psky_percent:.1f}%  p {stats.p_percent:.1f}%  coverage {cov:.3f}"
    )
    for rule, produced in classifier.explain(features):
        console.print(f"  [dim]{rule.description} -> {produced.value}[/dim]")
    console.print(f"[bold]MAAB class:[/bold] {label.value}")


@cli.command("motifs")
@click.option("--order", default=",".join(DEFAULT_ORDER), help=ORDER_HELP)
def motifs_cmd(order: str):
    """List the motif catalog in counting order and the residue classes."""
    try:
        groups = resolve_order(parse_order(order))
    except MaabError as e:
        console.print(f"[red]✗ {e}[/red]")
        sys.exit(1)

    table = Table(title="Motif catalog", show_header=True, header_style="bold cyan")
    table.add_column("Group", style="bold")
    table.add_column("Motif")
    table.add_column("Pattern")
    for group in groups:
        for motif in group.motifs:
            table.add_row(group.name, motif.name, escape(motif.pattern))
    console.print(table)

    classes = Table(title="Residue classes", show_header=True, header_style="bold cyan")
    classes.add_column("Class", style="bold")
    classes.add_column("Pattern")
    for residue_class in COMPOSITION_CLASSES:
        classes.add_row(residue_class.name, residue_class.pattern)
    console.print(classes)


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
