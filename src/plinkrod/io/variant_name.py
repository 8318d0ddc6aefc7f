"""Variant identifiers that encode their own location.

Text .ped files carry no separate map file here, so each variant column is
named with the convention

    <anything>|c<CHROM>_p<POS>[_g{I|D}<LEN>][_<anything>...]

e.g. ``rs123|c1_p10500`` or ``del7|c7_p2200_gD3``. An insertion (``gI``)
keeps a reference length of 1; a deletion (``gD``) spans LEN reference
bases.
"""

from typing import NamedTuple

from plinkrod.core.genome_loc import GenomeLoc, parse_genome_loc
from plinkrod.errors import InvalidFormatError

CHROMOSOME_MARKER = "|c"


class VariantNameInfo(NamedTuple):
    """Location and indel metadata decoded from a variant identifier."""

    location: GenomeLoc
    is_indel: bool = False
    is_insertion: bool = False
    length: int = 1


def parse_variant_name(name: str) -> VariantNameInfo:
    """Decode location and indel metadata from a variant identifier.

    Args:
        name: Variant identifier following the ``...|c<CHROM>_p<POS>``
            convention.

    Returns:
        VariantNameInfo with the single-point location and indel fields.

    Raises:
        InvalidFormatError: If the chromosome marker, the position piece or
            a numeric deletion length is missing or malformed.

    Example:
        >>> info = parse_variant_name("del7|c7_p2200_gD3")
        >>> str(info.location), info.is_indel, info.is_insertion, info.length
        ('7:2200', True, False, 3)
    """
    marker = name.find(CHROMOSOME_MARKER)
    if marker == -1:
        raise InvalidFormatError(
            f"Variant name {name} does not adhere to required convention "
            "(...|c...): missing chromosome marker"
        )

    pieces = name[marker + len(CHROMOSOME_MARKER) :].split("_")
    if len(pieces) < 2:
        raise InvalidFormatError(
            f"Variant name {name} does not adhere to required convention "
            "(...|c..._p...)"
        )

    chrom = pieces[0].strip()
    if not pieces[1].startswith("p"):
        raise InvalidFormatError(
            f"Variant name {name} does not adhere to required convention "
            "(...|c..._p...)"
        )
    pos = pieces[1][1:].strip()

    try:
        location = parse_genome_loc(f"{chrom}:{pos}")
    except InvalidFormatError as e:
        raise InvalidFormatError(
            f"Variant name {name} has an invalid location: {e.message}"
        ) from e

    if len(pieces) < 3 or not pieces[2].startswith(("gI", "gD")):
        return VariantNameInfo(location)

    if pieces[2].startswith("gI"):
        return VariantNameInfo(location, is_indel=True, is_insertion=True)

    suffix = pieces[2][2:]
    if not suffix.isdecimal():
        raise InvalidFormatError(
            f"Variant name {name} does not adhere to required convention "
            "(...|c..._p..._g[I/D][length])"
        )
    return VariantNameInfo(location, is_indel=True, length=int(suffix))
