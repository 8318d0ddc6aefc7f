"""plinkrod: PLINK pedigree genotype decoding.

plinkrod reads genotype-by-sample datasets in either PLINK encoding, the
tab-separated text .ped/.raw form or the binary .bed/.bim/.fam trio, and
returns the variants sorted by genome location, each carrying one allele
pair per sample.

Key features:
- One entry point for both encodings, chosen by file extension
- SNP-major and sample-major .bed layouts
- Shared allele objects within a variant and a single NO_CALL sentinel

Example:
    >>> from plinkrod import read_plink
    >>> variants = read_plink("data/study.bed")
    >>> print(f"{len(variants)} variants, {variants.n_samples} samples")
"""

import sys
from importlib.metadata import version

from loguru import logger

__version__ = version("plinkrod")

# Configure loguru with sensible defaults on import
# Users can override by calling logger.remove()/add()
logger.remove()  # Remove default handler
logger.add(
    sys.stdout,
    level="INFO",
    format="{time:HH:mm:ss} | <level>{level: <8}</level> | {message}",
    colorize=True,
)

from plinkrod.core import NO_CALL, Allele, GenomeLoc, ReaderConfig  # noqa: E402
from plinkrod.core import parse_genome_loc  # noqa: E402
from plinkrod.errors import (  # noqa: E402
    InvalidFormatError,
    PlinkError,
    PlinkReadError,
    TruncatedRowError,
    UnsupportedFormatError,
)
from plinkrod.io import (  # noqa: E402
    parse_variant_name,
    read_binary,
    read_ped,
    read_plink,
)
from plinkrod.variants import (  # noqa: E402
    PlinkFileType,
    PlinkRecord,
    Variant,
    VariantCollection,
    VariantCursor,
)

__all__ = [
    "NO_CALL",
    "Allele",
    "GenomeLoc",
    "InvalidFormatError",
    "PlinkError",
    "PlinkFileType",
    "PlinkReadError",
    "PlinkRecord",
    "ReaderConfig",
    "TruncatedRowError",
    "UnsupportedFormatError",
    "Variant",
    "VariantCollection",
    "VariantCursor",
    "__version__",
    "parse_genome_loc",
    "parse_variant_name",
    "read_binary",
    "read_ped",
    "read_plink",
]
