"""plinkrod command-line interface.

Typer-based CLI for inspecting PLINK inputs: summarise a file, print its
variants with per-sample genotypes, or export them to a tab-separated table
with an accompanying run log.
"""

import sys
import time
from collections.abc import Iterator
from pathlib import Path
from typing import Annotated

import typer

import plinkrod
from plinkrod.core import OutputConfig, ReaderConfig
from plinkrod.errors import PlinkError
from plinkrod.io import read_plink
from plinkrod.utils import collect_warnings, setup_logging, write_run_log
from plinkrod.variants import Variant, VariantCollection, format_genotype

app = typer.Typer(
    name="plinkrod",
    help="plinkrod: decode PLINK .ped and .bed/.bim/.fam genotype files.",
    add_completion=False,
)

_PATH_HELP = "PLINK .ped/.raw or .bed/.bim/.fam file"

# Store global options set by callback
_global_config: OutputConfig | None = None


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"plinkrod version {plinkrod.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    outdir: Annotated[
        Path,
        typer.Option("--outdir", help="Output directory"),
    ] = Path("output"),
    output: Annotated[
        str,
        typer.Option("-o", "--output", help="Output file prefix"),
    ] = "result",
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Verbose output"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """plinkrod: PLINK genotype decoding."""
    global _global_config
    _global_config = OutputConfig(outdir=outdir, prefix=output, verbose=verbose)
    setup_logging(verbose=verbose)


def _load(path: Path, show_progress: bool = False) -> VariantCollection:
    try:
        return read_plink(path, config=ReaderConfig(show_progress=show_progress))
    except (OSError, PlinkError) as e:
        typer.echo(f"Error loading PLINK data: {e}", err=True)
        raise typer.Exit(code=1) from None


def _indel_label(variant: Variant) -> str:
    if not variant.is_indel:
        return "-"
    return "I" if variant.is_insertion else f"D{variant.length}"


def table_lines(
    collection: VariantCollection, limit: int | None = None
) -> Iterator[str]:
    """Tab-separated rows: name, location, indel flag, one genotype per sample."""
    yield "\t".join(["name", "location", "indel", *collection.sample_names])
    for i, record in enumerate(collection.records()):
        if limit is not None and i >= limit:
            break
        genotypes = record.genotypes
        calls = [
            format_genotype(genotypes[s]) if s in genotypes else "./."
            for s in collection.sample_names
        ]
        yield "\t".join(
            [record.name, str(record.location), _indel_label(record.variant), *calls]
        )


@app.command("info")
def info_command(
    path: Annotated[Path, typer.Argument(help=_PATH_HELP)],
) -> None:
    """Summarise a PLINK file: encoding, sample and variant counts, extent."""
    collection = _load(path)
    summary = collection.summary()

    typer.echo(f"File: {path}")
    typer.echo(f"Format: {summary['file_type']}")
    typer.echo(f"Samples: {summary['n_samples']}")
    typer.echo(f"Variants: {summary['n_variants']}")
    if summary["n_variants"]:
        typer.echo(f"First: {summary['first_location']}")
        typer.echo(f"Last: {summary['last_location']}")


@app.command("view")
def view_command(
    path: Annotated[Path, typer.Argument(help=_PATH_HELP)],
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Print at most this many variants"),
    ] = None,
) -> None:
    """Print variants in location order with one genotype column per sample."""
    # keep stdout clean for the table unless debugging
    if _global_config is None or not _global_config.verbose:
        setup_logging(quiet=True)
    collection = _load(path)
    for line in table_lines(collection, limit=limit):
        typer.echo(line)


@app.command("export")
def export_command(
    path: Annotated[Path, typer.Argument(help=_PATH_HELP)],
    progress: Annotated[
        bool,
        typer.Option("--progress/--no-progress", help="Show a progress bar"),
    ] = False,
) -> None:
    """Write the genotype table and a run log to the output directory."""
    start_time = time.perf_counter()

    global _global_config
    if _global_config is None:
        _global_config = OutputConfig()

    command_line = " ".join(sys.argv)

    typer.echo(f"Loading PLINK data from {path}...")
    with collect_warnings() as warnings:
        collection = _load(path, show_progress=progress)
    typer.echo(
        f"Loaded {collection.n_samples} samples, {collection.n_variants} variants"
    )

    _global_config.ensure_outdir()
    table_path = _global_config.table_path
    with open(table_path, "w", encoding="utf-8") as f:
        for line in table_lines(collection):
            f.write(line + "\n")
    typer.echo(f"Genotype table written to {table_path}")

    log_path = write_run_log(
        _global_config,
        source=path,
        summary=collection.summary(),
        warnings=warnings,
        elapsed=time.perf_counter() - start_time,
        command_line=command_line,
    )
    typer.echo(f"Log written to {log_path}")


if __name__ == "__main__":
    app()
