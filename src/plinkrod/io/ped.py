"""PLINK text pedigree (.ped/.raw) decoding.

Only the standard, un-recoded layout is supported: a tab-separated header
line starting with '#', followed by one row per sample. The header names
the pedigree metadata columns and then one column per variant; variant
columns must follow the ``...|c<CHROM>_p<POS>`` naming convention (see
variant_name). Each variant cell holds both alleles separated by
whitespace, e.g. ``A G``, with ``0`` for an allele that was not called.

Example:
    #Family ID<TAB>Individual ID<TAB>rs1|c1_p100<TAB>rs2|c1_p50
    fam1<TAB>sampleA<TAB>A A<TAB>C G
"""

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from plinkrod.core.config import ReaderConfig
from plinkrod.core.progress import track_rows
from plinkrod.errors import (
    InvalidFormatError,
    PlinkReadError,
    TruncatedRowError,
    UnsupportedFormatError,
)
from plinkrod.io.variant_name import parse_variant_name
from plinkrod.variants import PlinkFileType, Variant, VariantCollection

HEADER_PREFIX = "#"

# Pedigree columns that may precede the variant columns
METADATA_LABELS = frozenset(
    {
        "Family ID",
        "Individual ID",
        "Sex",
        "Paternal ID",
        "Maternal ID",
        "Phenotype",
        "FID",
        "IID",
        "PAT",
        "MAT",
        "SEX",
        "PHENOTYPE",
    }
)
SAMPLE_ID_LABELS = ("Individual ID", "IID")

_RECODED_MESSAGE = (
    "Plink file is likely of .raw or recoded format. Please use an uncoded .ped file."
)


@dataclass(frozen=True)
class PedHeader:
    """Column layout declared by a .ped header line.

    Attributes:
        fields: Header labels, with the leading '#' removed from the first.
        metadata_count: Number of recognised pedigree metadata columns.
        sample_column: Index of the Individual ID column.
        variant_names: Variant column labels in header order.
    """

    fields: tuple[str, ...]
    metadata_count: int
    sample_column: int
    variant_names: tuple[str, ...]

    @property
    def first_variant_column(self) -> int:
        """Row token index of the first genotype cell."""
        return max(self.metadata_count, self.sample_column + 1)


def parse_ped_header(line: str) -> PedHeader:
    """Classify the columns of a .ped header line.

    Raises:
        UnsupportedFormatError: If the line does not start with '#' or names
            no Individual ID column.
    """
    if not line.startswith(HEADER_PREFIX):
        raise UnsupportedFormatError(_RECODED_MESSAGE)

    fields = line.rstrip("\r\n")[len(HEADER_PREFIX) :].split("\t")
    # exported TSVs often end the header with a tab
    while fields and not fields[-1]:
        fields.pop()
    metadata = [field for field in fields if field in METADATA_LABELS]
    variant_names = tuple(field for field in fields if field not in METADATA_LABELS)

    sample_column = next(
        (i for i, field in enumerate(fields) if field in SAMPLE_ID_LABELS), None
    )
    if sample_column is None:
        raise UnsupportedFormatError(
            "Plink header has no 'Individual ID' column to identify samples"
        )

    return PedHeader(
        fields=tuple(fields),
        metadata_count=len(metadata),
        sample_column=sample_column,
        variant_names=variant_names,
    )


def split_ped_row(
    line: str,
    header: PedHeader,
    *,
    path: Path | None = None,
    line_num: int | None = None,
) -> tuple[str, list[list[str]]]:
    """Split a data row into its sample ID and per-variant allele strings.

    Cells are tab-separated (runs of tabs count as one separator). Metadata
    cells other than the sample ID are discarded, as are cells past the last
    variant.

    Returns:
        Tuple of (sample_id, alleles) where alleles holds, for each variant
        in header order, the up-to-two allele strings of its cell.

    Raises:
        TruncatedRowError: If the row is too short to reach the sample ID or
            to give every variant a cell.
    """
    tokens = [token for token in line.rstrip("\r\n").split("\t") if token]
    start = header.first_variant_column
    n_variants = len(header.variant_names)

    if len(tokens) < start + n_variants:
        raise TruncatedRowError(
            f"Row at line {line_num} has {max(len(tokens) - start, 0)} genotype "
            f"columns but the header declares {n_variants}",
            path=path,
        )

    sample = tokens[header.sample_column]
    alleles = [token.split()[:2] for token in tokens[start : start + n_variants]]
    return sample, alleles


def read_ped(
    path: str | Path,
    *,
    name: str | None = None,
    config: ReaderConfig | None = None,
) -> VariantCollection:
    """Decode a text .ped/.raw file into a location-sorted VariantCollection.

    Args:
        path: Path to the text file.
        name: Collection name. Defaults to the file stem.
        config: Reader options. With show_progress, data rows are counted on
            a stderr progress bar.

    Returns:
        VariantCollection with one genotype pair per data row for each
        header variant.

    Raises:
        FileNotFoundError: If the file does not exist.
        UnsupportedFormatError: If the file has no '#' header line.
        InvalidFormatError: If a variant column name breaks the naming
            convention.
        TruncatedRowError: If a row has fewer genotype cells than variants.
        PlinkReadError: If the file cannot be read or is not UTF-8.
    """
    config = config or ReaderConfig()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"PLINK text file not found: {path}")

    samples: list[str] = []
    try:
        with open(path, encoding="utf-8") as f:
            header_line = f.readline()
            if not header_line:
                raise UnsupportedFormatError("Plink text file is empty", path=path)
            try:
                header = parse_ped_header(header_line)
            except UnsupportedFormatError as e:
                raise UnsupportedFormatError(e.message, path=path) from e

            variants = _variants_from_header(header, path)
            logger.debug(
                f"{path}: {header.metadata_count} metadata columns, "
                f"{len(variants)} variants"
            )

            lines = track_rows(
                enumerate(f, 2), f"Reading {path.name}", enabled=config.show_progress
            )
            for line_num, line in lines:
                if not line.strip():
                    continue
                sample, alleles = split_ped_row(
                    line, header, path=path, line_num=line_num
                )
                samples.append(sample)
                for variant, allele_strings in zip(variants, alleles):
                    variant.add_genotype_entry(allele_strings)
    except FileNotFoundError:
        raise
    except UnicodeDecodeError as e:
        raise PlinkReadError(f"File is not valid UTF-8: {e}", path=path) from e
    except OSError as e:
        raise PlinkReadError(f"Error reading file: {e}", path=path) from e

    logger.info(
        f"Decoded {len(variants)} variants for {len(samples)} samples from {path}"
    )

    return VariantCollection(
        variants,
        samples,
        name=name or path.stem,
        source=path,
        file_type=PlinkFileType.STANDARD_PED,
    )


def _variants_from_header(header: PedHeader, path: Path) -> list[Variant]:
    variants = []
    for index, variant_name in enumerate(header.variant_names):
        try:
            info = parse_variant_name(variant_name)
        except InvalidFormatError as e:
            raise InvalidFormatError(e.message, path=path) from e
        variants.append(
            Variant(
                variant_name,
                info.location,
                is_indel=info.is_indel,
                is_insertion=info.is_insertion,
                length=info.length,
                source_index=index,
            )
        )
    return variants
