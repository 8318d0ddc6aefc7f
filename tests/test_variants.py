"""Tests for Variant, PlinkRecord and VariantCollection."""

import numpy as np
import pytest

from plinkrod.core.allele import NO_CALL, Allele
from plinkrod.core.genome_loc import GenomeLoc
from plinkrod.io.bed_codec import BedLayout, pack_codes
from plinkrod.variants import (
    HETEROZYGOUS,
    HOM_ALLELE1,
    HOM_ALLELE2,
    MISSING,
    PlinkFileType,
    Variant,
    VariantCollection,
    format_genotype,
)


def _variant(name: str, contig: str, pos: int, index: int = -1) -> Variant:
    return Variant(name, GenomeLoc.point(contig, pos), source_index=index)


def _binary_variant(name: str, codes: list[int], a1: str = "A", a2: str = "G"):
    variant = _variant(name, "1", 1)
    variant.set_alleles(a1, a2)
    for code in codes:
        variant.add_binary_genotype(code)
    return variant


@pytest.mark.tier0
class TestVariant:
    """Tests for genotype accumulation on a single Variant."""

    def test_binary_codes_map_to_pairs(self):
        variant = _binary_variant(
            "rs1", [HOM_ALLELE1, HETEROZYGOUS, HOM_ALLELE2, MISSING]
        )
        a, g = Allele("A"), Allele("G")
        assert variant.genotypes == [(a, a), (a, g), (g, g), (NO_CALL, NO_CALL)]

    def test_genotype_codes_round_trip(self):
        codes = [HOM_ALLELE2, MISSING, HETEROZYGOUS, HOM_ALLELE1]
        assert _binary_variant("rs1", codes).genotype_codes() == codes

    def test_monomorphic_codes(self):
        """With allele1 '0', homozygous calls re-encode as allele-1 homozygous."""
        variant = _binary_variant("rs1", [HOM_ALLELE2, MISSING], a1="0", a2="T")
        assert variant.genotype_codes() == [HOM_ALLELE1, MISSING]

    def test_codes_leave_frozen_variant_unchanged(self):
        """Re-encoding a frozen record does not grow its allele table."""
        variant = _binary_variant("rs1", [HOM_ALLELE1, MISSING])
        variant.freeze()
        interned = len(variant._interner)

        assert variant.genotype_codes() == [HOM_ALLELE1, MISSING]
        assert len(variant._interner) == interned
        assert "G" not in variant._interner

    def test_text_variant_has_no_codes(self):
        variant = _variant("rs1", "1", 1)
        variant.add_genotype_entry(["A", "G"])
        with pytest.raises(ValueError, match="no declared alleles"):
            variant.genotype_codes()

    def test_freeze(self):
        variant = _variant("rs1", "1", 1)
        variant.add_genotype_entry(["A", "A"])
        variant.freeze()
        assert variant.frozen
        assert isinstance(variant.genotypes, tuple)
        with pytest.raises(RuntimeError):
            variant.set_alleles("A", "G")

    def test_str(self):
        assert str(_variant("rs1", "2", 30)) == "rs1\t2:30"


@pytest.mark.tier0
class TestFormatGenotype:
    """Tests for format_genotype."""

    def test_pairs(self):
        assert format_genotype((Allele("A"), Allele("G"))) == "A/G"
        assert format_genotype((NO_CALL, NO_CALL)) == "./."
        assert format_genotype((Allele("T"), None)) == "T/."


@pytest.mark.tier0
class TestVariantCollection:
    """Tests for sorting, lookup and iteration."""

    def _collection(self) -> VariantCollection:
        variants = [
            _variant("c", "2", 10, 0),
            _variant("a", "1", 500, 1),
            _variant("x", "X", 1, 2),
            _variant("b", "1", 500, 3),
            _variant("z", "chr1", 20, 4),
        ]
        for variant in variants:
            variant.add_genotype_entry(["A", "C"])
            variant.add_genotype_entry(["0", "0"])
        return VariantCollection(
            variants, ["s1", "s2"], name="demo", file_type=PlinkFileType.STANDARD_PED
        )

    def test_sorted_and_stable(self):
        """Ties keep file order; 'chr1' sorts with '1'; X after autosomes."""
        collection = self._collection()
        assert [v.name for v in collection] == ["z", "a", "b", "c", "x"]

    def test_all_variants_frozen(self):
        assert all(v.frozen for v in self._collection())

    def test_sequence_protocol(self):
        collection = self._collection()
        assert len(collection) == collection.n_variants == 5
        assert collection[0].name == "z"
        assert [v.name for v in collection[-2:]] == ["c", "x"]

    def test_get_and_genotypes_of(self):
        collection = self._collection()
        assert collection.get("b").source_index == 3
        assert collection.get("missing") is None
        assert collection.genotypes_of("b")["s2"] == (NO_CALL, NO_CALL)
        with pytest.raises(KeyError):
            collection.genotypes_of("missing")

    def test_record_snapshot(self):
        record = self._collection().record(0)
        assert record.name == "z"
        assert str(record.location) == "chr1:20"
        assert record.genotypes == {
            "s1": (Allele("A"), Allele("C")),
            "s2": (NO_CALL, NO_CALL),
        }

    def test_summary(self):
        summary = self._collection().summary()
        assert summary == {
            "name": "demo",
            "file_type": "STANDARD_PED",
            "n_samples": 2,
            "n_variants": 5,
            "first_location": "chr1:20",
            "last_location": "X:1",
        }

    def test_empty_summary(self):
        summary = VariantCollection([], []).summary()
        assert summary["n_variants"] == 0
        assert summary["first_location"] is None
        assert summary["file_type"] == "unknown"

    def test_repr(self):
        assert repr(self._collection()) == (
            "VariantCollection(name='demo', n_variants=5, n_samples=2)"
        )


@pytest.mark.tier0
class TestVariantCursor:
    """Tests for the pull-based cursor."""

    def _collection(self) -> VariantCollection:
        return VariantCollection(
            [_variant("b", "1", 2), _variant("a", "1", 1)], ["s1"]
        )

    def test_has_next_and_next(self):
        cursor = self._collection().cursor()
        names = []
        while cursor.has_next():
            names.append(cursor.next().name)
        assert names == ["a", "b"]
        with pytest.raises(StopIteration):
            cursor.next()

    def test_cursors_are_independent(self):
        collection = self._collection()
        first, second = collection.cursor(), collection.cursor()
        first.next()
        assert second.next().name == "a"
        assert first.next().name == "b"

    def test_iterator_protocol(self):
        assert [r.name for r in self._collection().cursor()] == ["a", "b"]

    def test_remove_unsupported(self):
        with pytest.raises(NotImplementedError):
            self._collection().cursor().remove()

    def test_collection_reiterable(self):
        collection = self._collection()
        assert [v.name for v in collection] == [v.name for v in collection]


@pytest.mark.tier0
class TestCodeMatrix:
    """Tests for VariantCollection.to_code_matrix."""

    def test_file_order_repacks_to_payload(self):
        codes = np.array([[3, 2, 0, 1, 0], [0, 0, 3, 3, 2]], dtype=np.int8)
        variants = []
        for index, (contig, row) in enumerate(zip(["2", "1"], codes)):
            variant = Variant(f"rs{index}", GenomeLoc.point(contig, 1))
            variant.source_index = index
            variant.set_alleles("A", "G")
            for code in row:
                variant.add_binary_genotype(int(code))
            variants.append(variant)
        collection = VariantCollection(variants, [f"s{i}" for i in range(5)])

        matrix = collection.to_code_matrix()

        np.testing.assert_array_equal(matrix, codes)
        layout = BedLayout(2, 5)
        assert pack_codes(matrix, layout) == pack_codes(codes, layout)

    def test_short_rows_padded_with_unfilled(self):
        variant = _binary_variant("rs1", [HOM_ALLELE1])
        matrix = VariantCollection([variant], ["s1", "s2"]).to_code_matrix()
        np.testing.assert_array_equal(matrix, [[0, -1]])

    def test_bad_order(self):
        with pytest.raises(ValueError, match="order"):
            VariantCollection([], []).to_code_matrix(order="random")
