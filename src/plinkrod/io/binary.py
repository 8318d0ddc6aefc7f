"""PLINK binary trio (.bed/.bim/.fam) decoding.

The trio is located from any one of its members by swapping the extension.
Variant metadata and sample order come from the .bim and .fam text files;
genotypes come from the bit-packed .bed file (see bed_codec for the layout).
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from loguru import logger

from plinkrod.core.config import ReaderConfig
from plinkrod.core.genome_loc import GenomeLoc
from plinkrod.core.progress import track_rows
from plinkrod.errors import InvalidFormatError, PlinkReadError
from plinkrod.io.bed_codec import HEADER_SIZE, UNFILLED, BedLayout, decode_payload
from plinkrod.variants import PlinkFileType, Variant, VariantCollection

BINARY_EXTENSIONS = ("bed", "bim", "fam")


@dataclass(frozen=True)
class PlinkTrio:
    """Paths of the three files making up a binary PLINK dataset."""

    bed: Path
    bim: Path
    fam: Path

    def check_exists(self) -> None:
        """Raise FileNotFoundError naming the first missing member."""
        for kind, path in (("bim", self.bim), ("fam", self.fam), ("bed", self.bed)):
            if not path.exists():
                raise FileNotFoundError(
                    f"PLINK .{kind} file not found: {path} "
                    "(the .bed, .bim and .fam files must share a directory and "
                    "base name)"
                )


def plink_trio(path: str | Path) -> PlinkTrio:
    """Derive the .bed/.bim/.fam paths from any one member of the trio.

    Args:
        path: Path to a .bed, .bim or .fam file (or the shared prefix).

    Example:
        >>> plink_trio("data/study.fam").bed
        PosixPath('data/study.bed')
    """
    path = Path(path)
    prefix = path.with_suffix("") if path.suffix[1:] in BINARY_EXTENSIONS else path
    return PlinkTrio(
        bed=Path(f"{prefix}.bed"),
        bim=Path(f"{prefix}.bim"),
        fam=Path(f"{prefix}.fam"),
    )


def read_bim(path: Path) -> list[Variant]:
    """Read variant metadata from a .bim file, preserving row order.

    Row format (whitespace-separated, no header):
    chromosome  name  genetic_distance  position  allele1  allele2

    Raises:
        InvalidFormatError: If a row has fewer than six fields or a
            non-integer position.
        PlinkReadError: If the file cannot be read.
    """
    variants: list[Variant] = []
    try:
        with open(path, encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                parts = line.split()
                if not parts:
                    continue
                if len(parts) < 6:
                    raise InvalidFormatError(
                        f"Invalid .bim row at line {line_num}: expected 6 columns, "
                        f"got {len(parts)}",
                        path=path,
                    )
                chrom, name, _, position, allele1, allele2 = parts[:6]
                try:
                    location = GenomeLoc.point(chrom, int(position))
                except ValueError as e:
                    raise InvalidFormatError(
                        f"Invalid .bim position '{position}' at line {line_num}",
                        path=path,
                    ) from e
                variant = Variant(name, location, source_index=len(variants))
                variant.set_alleles(allele1, allele2)
                variants.append(variant)
    except FileNotFoundError:
        raise
    except UnicodeDecodeError as e:
        raise PlinkReadError(f".bim file is not valid UTF-8: {e}", path=path) from e
    except OSError as e:
        raise PlinkReadError(f"Error reading .bim file: {e}", path=path) from e

    return variants


def read_fam(path: Path) -> list[str]:
    """Read sample identifiers (second column) from a .fam file in row order.

    Raises:
        InvalidFormatError: If a row has fewer than two fields.
        PlinkReadError: If the file cannot be read.
    """
    samples: list[str] = []
    try:
        with open(path, encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                parts = line.split()
                if not parts:
                    continue
                if len(parts) < 2:
                    raise InvalidFormatError(
                        f"Invalid .fam row at line {line_num}: no individual ID",
                        path=path,
                    )
                samples.append(parts[1])
    except FileNotFoundError:
        raise
    except UnicodeDecodeError as e:
        raise PlinkReadError(f".fam file is not valid UTF-8: {e}", path=path) from e
    except OSError as e:
        raise PlinkReadError(f"Error reading .fam file: {e}", path=path) from e

    return samples


def read_bed(path: Path, n_variants: int, n_samples: int) -> np.ndarray:
    """Read the genotype code matrix from a .bed file.

    Bytes 0 and 1 of the header are not checked. A payload shorter than the
    dimensions require is tolerated (missing slots are UNFILLED) and so is
    one that is longer (extra bytes are ignored); both are logged.

    Args:
        path: Path to the .bed file.
        n_variants: Number of variants in the .bim file.
        n_samples: Number of samples in the .fam file.

    Returns:
        int8 array of shape (n_variants, n_samples) with codes 0-3 or
        UNFILLED.

    Raises:
        PlinkReadError: If the file cannot be read.
    """
    try:
        with open(path, "rb") as f:
            header = f.read(HEADER_SIZE)
            payload = f.read()
    except FileNotFoundError:
        raise
    except OSError as e:
        raise PlinkReadError(f"Error reading .bed file: {e}", path=path) from e

    if len(header) < HEADER_SIZE:
        logger.warning(
            f"{path} is shorter than the {HEADER_SIZE}-byte .bed header; "
            "no genotypes decoded"
        )
        return np.full((n_variants, n_samples), UNFILLED, dtype=np.int8)

    layout = BedLayout.from_mode_byte(header[2], n_variants, n_samples)
    logger.debug(
        f"{path}: {'SNP' if layout.snp_major else 'sample'}-major, "
        f"{layout.rows} rows x {layout.bytes_per_row} bytes"
    )

    codes, trailing = decode_payload(payload, layout)

    unfilled = int(np.count_nonzero(codes == UNFILLED))
    if unfilled:
        logger.warning(
            f"{path} ended early: {len(payload)} of "
            f"{layout.expected_payload_size} payload bytes present, "
            f"{unfilled} genotypes left undecoded"
        )
    if trailing:
        logger.warning(f"{path} has {trailing} unexpected trailing bytes (ignored)")

    return codes


def read_binary(
    path: str | Path,
    *,
    name: str | None = None,
    config: ReaderConfig | None = None,
) -> VariantCollection:
    """Decode a binary PLINK trio into a location-sorted VariantCollection.

    Args:
        path: Any one of the .bed, .bim or .fam files (or the shared prefix).
        name: Collection name. Defaults to the file stem.
        config: Reader options.

    Returns:
        VariantCollection with one genotype pair per .fam sample for each
        .bim variant (fewer for a truncated .bed).

    Raises:
        FileNotFoundError: If any member of the trio is missing.
        InvalidFormatError: If the .bim or .fam file is malformed.
        PlinkReadError: If a file cannot be read.
    """
    config = config or ReaderConfig()
    trio = plink_trio(path)
    trio.check_exists()

    variants = read_bim(trio.bim)
    samples = read_fam(trio.fam)
    codes = read_bed(trio.bed, len(variants), len(samples))

    rows = track_rows(
        zip(variants, codes),
        f"Decoding {trio.bed.name}",
        total=len(variants),
        enabled=config.show_progress,
    )
    for variant, row in rows:
        for code in row:
            if code == UNFILLED:
                break
            variant.add_binary_genotype(int(code))

    logger.info(
        f"Decoded {len(variants)} variants for {len(samples)} samples "
        f"from {trio.bed}"
    )

    return VariantCollection(
        variants,
        samples,
        name=name or trio.bed.stem,
        source=trio.bed,
        file_type=PlinkFileType.BINARY_PED,
    )
