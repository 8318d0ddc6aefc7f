"""Variant records and the location-ordered collection built by the decoders.

A Variant is filled in incrementally while a file is decoded (genotype pairs
are appended in sample order) and frozen once the VariantCollection that
owns it has been sorted. After that every record is read-only, so a
collection can be shared between consumers and iterated by any number of
independent cursors.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, overload

import numpy as np

from plinkrod.core.allele import NO_CALL, NO_CALL_STRING, Allele, AlleleInterner
from plinkrod.core.genome_loc import GenomeLoc

GenotypePair = tuple[Allele | None, Allele | None]

# 2-bit genotype codes used by PLINK .bed files
HOM_ALLELE1 = 0
MISSING = 1
HETEROZYGOUS = 2
HOM_ALLELE2 = 3


class PlinkFileType(Enum):
    """Encoding a collection was decoded from."""

    STANDARD_PED = auto()  # .ped/.raw text with a '#' header
    BINARY_PED = auto()  # .bed/.bim/.fam trio


@dataclass(eq=False)
class Variant:
    """One genetic marker with its per-sample genotype calls.

    Attributes:
        name: Identifier from the input file.
        location: Genome location of the marker.
        is_indel: Marker is an insertion or deletion.
        is_insertion: Marker is an insertion (only meaningful for indels).
        length: Reference length of a deletion; 1 otherwise.
        allele1: First allele declared in the .bim file (binary input only).
            Never the no-call sentinel unless both declared alleles are.
        allele2: Second allele declared in the .bim file (binary input only).
        source_index: Position of the variant in the input file.
        genotypes: One allele pair per sample, in sample order. A list while
            decoding, a tuple once frozen.
    """

    name: str
    location: GenomeLoc
    is_indel: bool = False
    is_insertion: bool = False
    length: int = 1
    allele1: str | None = None
    allele2: str | None = None
    source_index: int = -1
    genotypes: Sequence[GenotypePair] = field(default_factory=list, repr=False)
    _interner: AlleleInterner = field(
        default_factory=AlleleInterner, init=False, repr=False
    )
    _frozen: bool = field(default=False, init=False, repr=False)

    def set_alleles(self, allele1: str, allele2: str) -> None:
        """Record the two alleles declared for this site.

        A "0" in the first slot marks a site where no variation was seen;
        the second allele then fills both slots.
        """
        self._check_mutable()
        self.allele1 = allele2 if allele1 == NO_CALL_STRING else allele1
        self.allele2 = allele2

    def add_genotype_entry(self, allele_strings: Sequence[str]) -> None:
        """Append the genotype of the next sample from up to two allele strings.

        Missing slots (fewer than two strings) are stored as None.
        """
        self._check_mutable()
        intern = self._interner.intern
        pair = tuple(
            intern(allele_strings[i]) if i < len(allele_strings) else None
            for i in range(2)
        )
        self.genotypes.append(pair)

    def add_binary_genotype(self, code: int) -> None:
        """Append the genotype of the next sample from a 2-bit .bed code."""
        if code == HOM_ALLELE1:
            alleles = (self.allele1, self.allele1)
        elif code == HETEROZYGOUS:
            alleles = (self.allele1, self.allele2)
        elif code == HOM_ALLELE2:
            alleles = (self.allele2, self.allele2)
        else:
            alleles = (NO_CALL_STRING, NO_CALL_STRING)
        self.add_genotype_entry(alleles)

    def genotype_codes(self) -> list[int]:
        """Re-derive the 2-bit .bed code of every genotype pair.

        Raises:
            ValueError: If the variant has no declared alleles (text input) or
                a pair cannot be expressed with them.
        """
        if self.allele1 is None or self.allele2 is None:
            raise ValueError(f"Variant {self.name} has no declared alleles")

        # value lookups; the interner stays untouched once frozen
        first = Allele.create(self.allele1)
        second = Allele.create(self.allele2)
        # first == second when the .bim declared "0" for allele1
        lookup: dict[GenotypePair, int] = {}
        lookup.setdefault((NO_CALL, NO_CALL), MISSING)
        lookup.setdefault((first, first), HOM_ALLELE1)
        lookup.setdefault((first, second), HETEROZYGOUS)
        lookup.setdefault((second, second), HOM_ALLELE2)

        codes = []
        for pair in self.genotypes:
            code = lookup.get(pair)
            if code is None:
                raise ValueError(
                    f"Genotype {format_genotype(pair)} of variant {self.name} "
                    f"cannot be encoded with alleles {self.allele1}/{self.allele2}"
                )
            codes.append(code)
        return codes

    def freeze(self) -> None:
        """Make the genotype list immutable."""
        if not self._frozen:
            self.genotypes = tuple(self.genotypes)
            self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError(f"Variant {self.name} is frozen")

    def __str__(self) -> str:
        return f"{self.name}\t{self.location}"


def format_genotype(pair: GenotypePair) -> str:
    """Render an allele pair as "A/G"; missing slots become "."."""
    return "/".join("." if allele is None else str(allele) for allele in pair)


@dataclass(frozen=True)
class PlinkRecord:
    """Read-only view of one variant together with the sample ordering."""

    variant: Variant
    sample_names: tuple[str, ...]

    @property
    def name(self) -> str:
        return self.variant.name

    @property
    def location(self) -> GenomeLoc:
        return self.variant.location

    @property
    def is_indel(self) -> bool:
        return self.variant.is_indel

    @property
    def is_insertion(self) -> bool:
        return self.variant.is_insertion

    @property
    def length(self) -> int:
        return self.variant.length

    @property
    def genotypes(self) -> dict[str, GenotypePair]:
        """Mapping from sample name to allele pair.

        None of the alleles are flagged as reference: the file does not say
        which one matches the reference genome.
        """
        return dict(zip(self.sample_names, self.variant.genotypes))

    def __str__(self) -> str:
        return str(self.variant)


class VariantCursor:
    """Pull-based cursor over a VariantCollection.

    Holds only an index into the collection's sorted tuple, so several
    cursors can walk the same collection independently.
    """

    def __init__(self, collection: VariantCollection) -> None:
        self._collection = collection
        self._index = 0

    def has_next(self) -> bool:
        return self._index < len(self._collection)

    def next(self) -> PlinkRecord:
        if not self.has_next():
            raise StopIteration(
                f"No more variants in {self._collection.name} "
                f"({len(self._collection)} total)"
            )
        record = self._collection.record(self._index)
        self._index += 1
        return record

    def remove(self) -> None:
        raise NotImplementedError("Variants cannot be removed from a PLINK collection")

    def __iter__(self) -> VariantCursor:
        return self

    def __next__(self) -> PlinkRecord:
        return self.next()


class VariantCollection(Sequence[Variant]):
    """All variants of one PLINK input, sorted by genome location.

    Sorting is stable, so variants sharing a location keep their file order.
    Every variant is frozen on construction.

    Attributes:
        name: Label for this collection (defaults to the input file stem).
        source: Path the collection was decoded from, if any.
        file_type: Encoding of the input.
    """

    def __init__(
        self,
        variants: Iterable[Variant],
        sample_names: Iterable[str],
        *,
        name: str = "plink",
        source: Path | None = None,
        file_type: PlinkFileType | None = None,
    ) -> None:
        ordered = sorted(variants, key=lambda v: v.location.sort_key)
        for variant in ordered:
            variant.freeze()
        self._variants: tuple[Variant, ...] = tuple(ordered)
        self._sample_names: tuple[str, ...] = tuple(sample_names)
        self.name = name
        self.source = source
        self.file_type = file_type

    @property
    def variants(self) -> tuple[Variant, ...]:
        return self._variants

    @property
    def sample_names(self) -> tuple[str, ...]:
        return self._sample_names

    @property
    def n_samples(self) -> int:
        return len(self._sample_names)

    @property
    def n_variants(self) -> int:
        return len(self._variants)

    def __len__(self) -> int:
        return len(self._variants)

    @overload
    def __getitem__(self, index: int) -> Variant: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[Variant, ...]: ...

    def __getitem__(self, index):
        return self._variants[index]

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._variants)

    def record(self, index: int) -> PlinkRecord:
        """Snapshot of the variant at a sorted position."""
        return PlinkRecord(self._variants[index], self._sample_names)

    def records(self) -> Iterator[PlinkRecord]:
        for variant in self._variants:
            yield PlinkRecord(variant, self._sample_names)

    def cursor(self) -> VariantCursor:
        """New independent cursor positioned before the first variant."""
        return VariantCursor(self)

    def get(self, name: str) -> Variant | None:
        """First variant with the given identifier, or None."""
        for variant in self._variants:
            if variant.name == name:
                return variant
        return None

    def genotypes_of(self, name: str) -> Mapping[str, GenotypePair]:
        """Sample-to-genotype mapping of a named variant.

        Raises:
            KeyError: If no variant has that name.
        """
        variant = self.get(name)
        if variant is None:
            raise KeyError(name)
        return PlinkRecord(variant, self._sample_names).genotypes

    def to_code_matrix(self, order: str = "file") -> np.ndarray:
        """Genotypes as 2-bit .bed codes, shape (n_variants, n_samples).

        Slots that were never filled (truncated .bed input) are -1.

        Args:
            order: "file" for input-file order, "sorted" for location order.

        Raises:
            ValueError: If order is unknown or a variant has no declared
                alleles (text input).
        """
        if order == "file":
            variants = sorted(self._variants, key=lambda v: v.source_index)
        elif order == "sorted":
            variants = list(self._variants)
        else:
            raise ValueError(f"order must be 'file' or 'sorted', got {order!r}")

        matrix = np.full((len(variants), self.n_samples), -1, dtype=np.int8)
        for row, variant in enumerate(variants):
            codes = variant.genotype_codes()[: self.n_samples]
            matrix[row, : len(codes)] = codes
        return matrix

    def summary(self) -> dict[str, Any]:
        """Counts and extent of the collection, for logs and the CLI."""
        return {
            "name": self.name,
            "file_type": self.file_type.name if self.file_type else "unknown",
            "n_samples": self.n_samples,
            "n_variants": self.n_variants,
            "first_location": str(self._variants[0].location) if self else None,
            "last_location": str(self._variants[-1].location) if self else None,
        }

    def __repr__(self) -> str:
        return (
            f"VariantCollection(name={self.name!r}, n_variants={self.n_variants}, "
            f"n_samples={self.n_samples})"
        )
