"""I/O modules for plinkrod.

This package contains the PLINK decoders:
- dispatch: read_plink, choosing a decoder from the file extension
- ped: text .ped/.raw decoding
- binary: .bed/.bim/.fam trio decoding
- bed_codec: 2-bit genotype packing used by .bed files
- variant_name: the ``...|c<CHROM>_p<POS>`` variant naming convention
"""

from plinkrod.io.bed_codec import BedLayout, decode_payload, encode_bed, pack_codes
from plinkrod.io.binary import PlinkTrio, plink_trio, read_binary
from plinkrod.io.dispatch import detect_plink_file_type, read_plink
from plinkrod.io.ped import PedHeader, parse_ped_header, read_ped
from plinkrod.io.variant_name import VariantNameInfo, parse_variant_name

__all__ = [
    "BedLayout",
    "PedHeader",
    "PlinkTrio",
    "VariantNameInfo",
    "decode_payload",
    "detect_plink_file_type",
    "encode_bed",
    "pack_codes",
    "parse_ped_header",
    "parse_variant_name",
    "plink_trio",
    "read_binary",
    "read_ped",
    "read_plink",
]
