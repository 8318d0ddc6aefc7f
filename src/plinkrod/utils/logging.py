"""Logging for plinkrod.

Console output goes through loguru. The export command additionally keeps
the warnings raised while a file is decoded (short or over-long .bed
payloads, unrecognised extensions) and writes them into its '##' run log
next to the exported table.
"""

import sys
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

import plinkrod
from plinkrod.core.config import OutputConfig

CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <8}</level> | {message}"


def console_level(verbose: bool = False, quiet: bool = False) -> str:
    """DEBUG when verbose, WARNING when quiet (table output), else INFO."""
    if verbose:
        return "DEBUG"
    return "WARNING" if quiet else "INFO"


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    quiet: bool = False,
) -> None:
    """Replace all loguru sinks with the plinkrod console sink.

    Args:
        verbose: Show DEBUG records (header layout, .bed storage order).
        log_file: Optional JSON-lines file receiving every DEBUG record
            emitted by plinkrod modules.
        quiet: Only show warnings, so stdout can carry a table.
    """
    logger.remove()
    logger.add(
        sys.stdout,
        level=console_level(verbose, quiet),
        format=CONSOLE_FORMAT,
        colorize=True,
    )
    if log_file:
        logger.add(log_file, serialize=True, level="DEBUG", filter="plinkrod")


@contextmanager
def collect_warnings() -> Iterator[list[str]]:
    """Gather the messages of WARNING-or-worse records emitted in the block.

    Example:
        >>> with collect_warnings() as warnings:
        ...     collection = read_plink("study.bed")
        >>> len(warnings)
        0
    """
    messages: list[str] = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["message"]),
        level="WARNING",
    )
    try:
        yield messages
    finally:
        logger.remove(handler_id)


def write_run_log(
    output_config: OutputConfig,
    source: Path,
    summary: Mapping[str, Any],
    warnings: Sequence[str],
    elapsed: float,
    command_line: str,
) -> Path:
    """Describe one export in a '##'-prefixed log at output_config.log_path.

    Args:
        output_config: Output directory and prefix.
        source: File the collection was decoded from.
        summary: VariantCollection.summary() of the decoded input.
        warnings: Decode warnings, e.g. from collect_warnings().
        elapsed: Wall time of the export in seconds.
        command_line: The command line used to invoke the program.

    Returns:
        Path to the written log file.

    Example output:
        ##
        ## plinkrod Version = 0.1.0
        ## Date = 2024-01-31T10:30:00
        ## Command Line Input = plinkrod export data/study.bed
        ##
        ## Input = data/study.bed
        ## Format = BINARY_PED
        ## Samples = 4
        ## Variants = 12
        ## First Location = 1:500
        ## Last Location = X:1200
        ##
        ## Decode Warnings = 1
        ## data/study.bed has 2 unexpected trailing bytes (ignored)
        ##
        ## Table = output/result.genotypes.tsv
        ## Computation Time = 0.01 seconds
        ##
    """
    output_config.ensure_outdir()

    lines = [
        "",
        f" plinkrod Version = {plinkrod.__version__}",
        f" Date = {datetime.now().isoformat(timespec='seconds')}",
        f" Command Line Input = {command_line}",
        "",
        f" Input = {source}",
        f" Format = {summary['file_type']}",
        f" Samples = {summary['n_samples']}",
        f" Variants = {summary['n_variants']}",
    ]
    if summary["n_variants"]:
        lines.append(f" First Location = {summary['first_location']}")
        lines.append(f" Last Location = {summary['last_location']}")
    lines += ["", f" Decode Warnings = {len(warnings)}"]
    lines += [f" {warning}" for warning in warnings]
    lines += [
        "",
        f" Table = {output_config.table_path}",
        f" Computation Time = {elapsed:.2f} seconds",
        "",
    ]

    log_path = output_config.log_path
    log_path.write_text("".join(f"##{line}\n" for line in lines))
    return log_path
