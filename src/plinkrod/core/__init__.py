"""Core value types and settings for plinkrod.

This package contains:
- allele: Allele values, the NO_CALL sentinel and per-variant interning
- genome_loc: Ordered genome coordinates and their parser
- config: Reader and output configuration dataclasses
- progress: progressbar2 wrapper used by the decoders
"""

from plinkrod.core.allele import NO_CALL, Allele, AlleleInterner
from plinkrod.core.config import OutputConfig, ReaderConfig
from plinkrod.core.genome_loc import GenomeLoc, contig_rank, parse_genome_loc

__all__ = [
    "NO_CALL",
    "Allele",
    "AlleleInterner",
    "GenomeLoc",
    "OutputConfig",
    "ReaderConfig",
    "contig_rank",
    "parse_genome_loc",
]
