"""Entry point choosing the text or binary decoder from a file extension."""

from pathlib import Path

from loguru import logger

from plinkrod.core.config import ReaderConfig
from plinkrod.io.binary import BINARY_EXTENSIONS, read_binary
from plinkrod.io.ped import read_ped
from plinkrod.variants import PlinkFileType, VariantCollection

TEXT_EXTENSIONS = ("ped", "raw")


def detect_plink_file_type(path: str | Path) -> PlinkFileType | None:
    """Encoding implied by a file's last extension (case-sensitive).

    Returns:
        STANDARD_PED for .ped/.raw, BINARY_PED for .bed/.bim/.fam, None
        for anything else.
    """
    filename = Path(path).name
    extension = filename.rsplit(".", 1)[1] if "." in filename else ""
    if extension in TEXT_EXTENSIONS:
        return PlinkFileType.STANDARD_PED
    if extension in BINARY_EXTENSIONS:
        return PlinkFileType.BINARY_PED
    return None


def read_plink(
    path: str | Path,
    *,
    name: str | None = None,
    config: ReaderConfig | None = None,
) -> VariantCollection:
    """Decode any supported PLINK input into a location-sorted VariantCollection.

    Files ending in .ped or .raw are read as text; .bed, .bim or .fam select
    the binary trio. Any other extension falls back to the text decoder with
    a warning.

    Args:
        path: Input file.
        name: Collection name. Defaults to the file stem.
        config: Reader options.

    Returns:
        VariantCollection sorted by genome location.

    Raises:
        FileNotFoundError: If the file (or a member of a binary trio) does
            not exist.
        plinkrod.errors.PlinkError: If decoding fails.

    Example:
        >>> variants = read_plink("data/study.bed")
        >>> for record in variants.records():
        ...     print(record.location, record.genotypes["sample1"])
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"PLINK file not found: {path}")

    file_type = detect_plink_file_type(path)
    if file_type is PlinkFileType.BINARY_PED:
        return read_binary(path, name=name, config=config)

    if file_type is None:
        logger.warning(
            f"{path} does not have a standard extension (ped/raw for text, "
            "bed/bim/fam for binary); assuming ped format"
        )
    return read_ped(path, name=name, config=config)
