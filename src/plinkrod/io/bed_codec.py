"""2-bit genotype codec for PLINK .bed files.

A .bed file starts with three header bytes. Bytes 0 and 1 are magic
(0x6C 0x1B) and byte 2 selects the storage order:

- 1: SNP-major, each row holds every sample of one variant
- anything else: sample-major, each row holds every variant of one sample

Each following byte packs four 2-bit codes, lowest bits first. A row starts
on a byte boundary, so the final byte of a row may carry padding codes that
belong to no column.

Codes: 0 = homozygous allele 1, 1 = missing, 2 = heterozygous,
3 = homozygous allele 2.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

BED_MAGIC = bytes([0x6C, 0x1B])
SNP_MAJOR_MODE = 1
SAMPLE_MAJOR_MODE = 0
HEADER_SIZE = 3
CODES_PER_BYTE = 4

_SHIFTS = np.array([0, 2, 4, 6], dtype=np.uint8)
UNFILLED = -1


@dataclass(frozen=True)
class BedLayout:
    """Shape of the genotype matrix inside a .bed payload.

    The row axis advances once per row (variants when SNP-major, samples
    when sample-major); the column axis advances once per 2-bit code.

    Attributes:
        n_variants: Number of variants (rows of the .bim file).
        n_samples: Number of samples (rows of the .fam file).
        snp_major: Storage order flag from header byte 2.
    """

    n_variants: int
    n_samples: int
    snp_major: bool = True

    @classmethod
    def from_mode_byte(cls, mode: int, n_variants: int, n_samples: int) -> BedLayout:
        return cls(n_variants, n_samples, snp_major=mode == SNP_MAJOR_MODE)

    @property
    def rows(self) -> int:
        return self.n_variants if self.snp_major else self.n_samples

    @property
    def columns(self) -> int:
        return self.n_samples if self.snp_major else self.n_variants

    @property
    def bytes_per_row(self) -> int:
        return (self.columns + CODES_PER_BYTE - 1) // CODES_PER_BYTE

    @property
    def expected_payload_size(self) -> int:
        return self.rows * self.bytes_per_row

    @property
    def mode_byte(self) -> int:
        return SNP_MAJOR_MODE if self.snp_major else SAMPLE_MAJOR_MODE


def unpack_byte(value: int) -> tuple[int, int, int, int]:
    """Split one byte into its four 2-bit codes, low bits first.

    Example:
        >>> unpack_byte(0b00001011)
        (3, 2, 0, 0)
    """
    return (value & 3, (value & 12) >> 2, (value & 48) >> 4, (value & 192) >> 6)


def unpack_codes(payload: bytes | np.ndarray) -> np.ndarray:
    """Unpack every byte of a payload into codes, shape (n_bytes * 4,)."""
    raw = _byte_array(payload) if isinstance(payload, bytes) else payload
    codes = (raw[:, None] >> _SHIFTS) & 0b11
    return codes.reshape(-1).astype(np.int8)


def decode_payload(payload: bytes, layout: BedLayout) -> tuple[np.ndarray, int]:
    """Decode a .bed payload (header stripped) into a code matrix.

    Rows are consumed in storage order; within a row, codes past the last
    column are padding and dropped. Decoding stops at the end of the payload
    without error, leaving any remaining slots as UNFILLED.

    Args:
        payload: Bytes following the 3-byte header.
        layout: Matrix dimensions and storage order.

    Returns:
        Tuple of (codes, trailing_bytes):
        - codes: int8 array of shape (n_variants, n_samples), UNFILLED where
          the payload ended early
        - trailing_bytes: Number of payload bytes past the expected size
    """
    matrix = np.full((layout.rows, layout.columns), UNFILLED, dtype=np.int8)
    if layout.rows == 0 or layout.columns == 0:
        return _as_variant_major(matrix, layout), len(payload)

    width = layout.bytes_per_row
    used = min(len(payload), layout.expected_payload_size)
    trailing = len(payload) - used
    raw = _byte_array(payload)[:used]

    full_rows = used // width
    if full_rows:
        rows = unpack_codes(raw[: full_rows * width]).reshape(full_rows, width * 4)
        matrix[:full_rows] = rows[:, : layout.columns]

    remainder = raw[full_rows * width :]
    if remainder.size:
        partial = unpack_codes(remainder)[: layout.columns]
        matrix[full_rows, : partial.size] = partial

    return _as_variant_major(matrix, layout), trailing


def _byte_array(payload: bytes) -> np.ndarray:
    if not payload:
        return np.empty(0, dtype=np.uint8)
    return np.frombuffer(payload, dtype=np.uint8)


def _as_variant_major(matrix: np.ndarray, layout: BedLayout) -> np.ndarray:
    return matrix if layout.snp_major else np.ascontiguousarray(matrix.T)


def pack_codes(codes: np.ndarray, layout: BedLayout) -> bytes:
    """Pack a code matrix into a .bed payload (without the header).

    Padding codes at the end of each row are written as 0.

    Args:
        codes: Integer array of shape (n_variants, n_samples) with values 0-3.
        layout: Storage order to write.

    Raises:
        ValueError: If the matrix shape does not match the layout or holds
            codes outside 0-3.
    """
    codes = np.asarray(codes)
    if codes.shape != (layout.n_variants, layout.n_samples):
        raise ValueError(
            f"Code matrix shape {codes.shape} does not match layout "
            f"({layout.n_variants} variants, {layout.n_samples} samples)"
        )
    if codes.size and (codes.min() < 0 or codes.max() > 3):
        raise ValueError("Genotype codes must be in 0-3")

    rows = codes if layout.snp_major else codes.T
    padded = np.zeros((layout.rows, layout.bytes_per_row * 4), dtype=np.uint8)
    padded[:, : layout.columns] = rows
    quads = padded.reshape(layout.rows, layout.bytes_per_row, 4)
    packed = (quads << _SHIFTS).sum(axis=2, dtype=np.uint16).astype(np.uint8)
    return packed.tobytes()


def encode_bed(codes: np.ndarray, snp_major: bool = True) -> bytes:
    """Full .bed file contents (header + payload) for a code matrix."""
    n_variants, n_samples = np.asarray(codes).shape
    layout = BedLayout(n_variants, n_samples, snp_major=snp_major)
    return BED_MAGIC + bytes([layout.mode_byte]) + pack_codes(codes, layout)
