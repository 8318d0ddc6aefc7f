"""Allele values and per-variant interning.

Alleles are small immutable values compared by content. Genotype entries
for one variant reuse the same Allele object for the same string through an
AlleleInterner owned by that variant. The no-call sentinel maps to the
module-level NO_CALL singleton everywhere.
"""

from __future__ import annotations

from dataclasses import dataclass

# PLINK writes "0" for an allele that was not called
NO_CALL_STRING = "0"


@dataclass(frozen=True, slots=True)
class Allele:
    """An observed allele.

    Attributes:
        bases: Allele string as written in the input (e.g. "A", "ACT").
        is_no_call: True only for the NO_CALL sentinel.
    """

    bases: str
    is_no_call: bool = False

    @classmethod
    def create(cls, bases: str) -> Allele:
        """Regular allele from its string; "0" yields NO_CALL."""
        if bases == NO_CALL_STRING:
            return NO_CALL
        return cls(bases)

    def __str__(self) -> str:
        return "." if self.is_no_call else self.bases


NO_CALL = Allele(".", is_no_call=True)


class AlleleInterner:
    """Maps allele strings to shared Allele handles for one variant."""

    __slots__ = ("_cache",)

    def __init__(self) -> None:
        self._cache: dict[str, Allele] = {}

    def intern(self, text: str) -> Allele:
        """Return the shared handle for an allele string.

        The first occurrence of a string creates and caches its Allele;
        later occurrences return the cached object. "0" always returns
        NO_CALL and is never cached.
        """
        allele = self._cache.get(text)
        if allele is None:
            allele = Allele.create(text)
            if allele is not NO_CALL:
                self._cache[text] = allele
        return allele

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, text: object) -> bool:
        return text in self._cache
