"""Configuration dataclasses for plinkrod.

ReaderConfig tunes the decoders; OutputConfig describes where the CLI
writes exported tables and run logs.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ReaderConfig:
    """Options shared by the text and binary decoders.

    Attributes:
        show_progress: Show a progress bar while genotypes are attached to
            variants (useful for large .bed files).
    """

    show_progress: bool = False


@dataclass
class OutputConfig:
    """Configuration for output files and directories.

    Attributes:
        outdir: Output directory for result files. Created if it doesn't exist.
        prefix: Prefix for output filenames (e.g., "result" produces "result.log.txt").
        verbose: Enable verbose/debug output to console.
    """

    outdir: Path = field(default_factory=lambda: Path("output"))
    prefix: str = "result"
    verbose: bool = False

    @property
    def log_path(self) -> Path:
        """Path to the run log: {outdir}/{prefix}.log.txt"""
        return self.outdir / f"{self.prefix}.log.txt"

    @property
    def table_path(self) -> Path:
        """Path to the exported genotype table: {outdir}/{prefix}.genotypes.tsv"""
        return self.outdir / f"{self.prefix}.genotypes.tsv"

    def ensure_outdir(self) -> None:
        """Create output directory if it doesn't exist."""
        self.outdir.mkdir(parents=True, exist_ok=True)
