"""Genome coordinates with a total order.

Locations are 1-based and inclusive; position 0 is accepted because PLINK
uses it for variants without a known position. Contigs are ranked with PLINK's
chromosome numbering so that sorted output follows karyotype order
(1..22, X, Y, XY, MT) regardless of whether names carry a "chr" prefix.
Contigs PLINK does not know about sort after the standard ones, by name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from plinkrod.errors import InvalidFormatError

# PLINK 1.x numeric codes for the non-autosomal chromosomes
_SPECIAL_CONTIGS = {"X": 23, "Y": 24, "XY": 25, "MT": 26, "M": 26}

_LOC_PATTERN = re.compile(
    r"^(?P<contig>[^:]+):(?P<start>\d[\d,]*)(?:-(?P<stop>\d[\d,]*))?$"
)


def contig_rank(contig: str) -> tuple[int, int, str]:
    """Sort key for a contig name.

    Args:
        contig: Chromosome name as written in the input (e.g. "1", "chrX").

    Returns:
        Tuple usable as a sort key. Known chromosomes come first, ordered
        by their PLINK number; everything else follows, ordered by name.
    """
    name = contig[3:] if contig.lower().startswith("chr") else contig
    if name.isdigit():
        return (0, int(name), "")
    code = _SPECIAL_CONTIGS.get(name.upper())
    if code is not None:
        return (0, code, "")
    return (1, 0, contig)


@total_ordering
@dataclass(frozen=True)
class GenomeLoc:
    """A closed interval on one contig.

    Attributes:
        contig: Chromosome name as written in the input.
        start: First base (1-based, 0 when unplaced).
        stop: Last base (inclusive). Equal to start for a single point.
    """

    contig: str
    start: int
    stop: int

    def __post_init__(self) -> None:
        if not self.contig:
            raise InvalidFormatError("Genome location has an empty contig name")
        if self.start < 0:
            raise InvalidFormatError(
                f"Genome location start must not be negative, got {self.start}"
            )
        if self.stop < self.start:
            raise InvalidFormatError(
                f"Genome location stop ({self.stop}) is before start ({self.start})"
            )

    @classmethod
    def point(cls, contig: str, position: int) -> GenomeLoc:
        """Single-base location."""
        return cls(contig, position, position)

    @property
    def is_point(self) -> bool:
        return self.start == self.stop

    @property
    def sort_key(self) -> tuple[tuple[int, int, str], int, int]:
        return (contig_rank(self.contig), self.start, self.stop)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, GenomeLoc):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __str__(self) -> str:
        if self.is_point:
            return f"{self.contig}:{self.start}"
        return f"{self.contig}:{self.start}-{self.stop}"


def parse_genome_loc(text: str) -> GenomeLoc:
    """Parse "chrom:pos" or "chrom:start-stop" into a GenomeLoc.

    Thousands separators are accepted in positions ("1:1,000,000").

    Args:
        text: Location string.

    Returns:
        Single-point location for "chrom:pos", a range otherwise.

    Raises:
        InvalidFormatError: If the text is not a valid location.

    Example:
        >>> parse_genome_loc("chr2:1,500")
        GenomeLoc(contig='chr2', start=1500, stop=1500)
    """
    match = _LOC_PATTERN.match(text.strip())
    if match is None:
        raise InvalidFormatError(f"Cannot parse genome location '{text}'")

    contig = match.group("contig").strip()
    start = int(match.group("start").replace(",", ""))
    stop_text = match.group("stop")
    stop = int(stop_text.replace(",", "")) if stop_text else start
    return GenomeLoc(contig, start, stop)
