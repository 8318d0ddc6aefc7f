"""Tests for the variant naming convention parser."""

import pytest

from plinkrod.core.genome_loc import GenomeLoc
from plinkrod.errors import InvalidFormatError
from plinkrod.io.variant_name import parse_variant_name


@pytest.mark.tier0
class TestParseVariantName:
    """Tests for parse_variant_name."""

    def test_snp(self):
        info = parse_variant_name("SNP1|c1_p100")
        assert info.location == GenomeLoc.point("1", 100)
        assert not info.is_indel
        assert not info.is_insertion
        assert info.length == 1

    def test_prefix_before_marker_ignored(self):
        """Anything before '|c' is free text, including underscores."""
        info = parse_variant_name("my_assay_42|cX_p5000")
        assert info.location == GenomeLoc.point("X", 5000)

    def test_insertion(self):
        """gI marks an insertion with reference length 1."""
        info = parse_variant_name("ins1|c2_p300_gI4")
        assert info.is_indel
        assert info.is_insertion
        assert info.length == 1

    def test_deletion_length(self):
        info = parse_variant_name("del7|c7_p2200_gD3")
        assert info.is_indel
        assert not info.is_insertion
        assert info.length == 3

    def test_other_third_piece_is_not_indel(self):
        info = parse_variant_name("s|c3_p10_extra")
        assert not info.is_indel
        assert info.length == 1

    def test_whitespace_trimmed(self):
        info = parse_variant_name("s|c 4 _p 77 ")
        assert info.location == GenomeLoc.point("4", 77)

    def test_missing_marker(self):
        with pytest.raises(InvalidFormatError, match="missing chromosome marker"):
            parse_variant_name("SNP_noChromMarker")

    def test_missing_position_piece(self):
        with pytest.raises(InvalidFormatError):
            parse_variant_name("SNP|c1")

    def test_position_piece_without_p(self):
        with pytest.raises(InvalidFormatError):
            parse_variant_name("SNP|c1_q100")

    def test_non_numeric_position(self):
        with pytest.raises(InvalidFormatError):
            parse_variant_name("SNP|c1_pabc")

    def test_non_numeric_deletion_length(self):
        with pytest.raises(InvalidFormatError, match="length"):
            parse_variant_name("del|c1_p100_gDxx")

    def test_idempotent(self):
        """Parsing the same name twice gives identical results."""
        name = "del7|c7_p2200_gD3"
        assert parse_variant_name(name) == parse_variant_name(name)

    def test_superscript_deletion_length(self):
        """Digit-like characters that int() rejects are a naming error."""
        with pytest.raises(InvalidFormatError, match="length"):
            parse_variant_name("x|c1_p5_gD³")
