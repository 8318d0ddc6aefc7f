"""Tests for extension-based decoder selection."""

from pathlib import Path

import pytest

from plinkrod import read_plink
from plinkrod.io.dispatch import detect_plink_file_type
from plinkrod.variants import PlinkFileType


@pytest.mark.tier0
class TestDetectPlinkFileType:
    """Tests for detect_plink_file_type."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("a.ped", PlinkFileType.STANDARD_PED),
            ("a.raw", PlinkFileType.STANDARD_PED),
            ("a.bed", PlinkFileType.BINARY_PED),
            ("a.bim", PlinkFileType.BINARY_PED),
            ("a.fam", PlinkFileType.BINARY_PED),
            ("cohort.v1.ped", PlinkFileType.STANDARD_PED),
            ("a.txt", None),
            ("a.PED", None),
            ("noextension", None),
        ],
    )
    def test_extensions(self, name, expected):
        assert detect_plink_file_type(name) is expected

    def test_directory_dots_ignored(self):
        assert detect_plink_file_type(Path("run.2/genotypes")) is None


@pytest.mark.tier0
class TestReadPlink:
    """Tests for read_plink."""

    def test_text_route(self, scenario_ped: Path):
        collection = read_plink(scenario_ped)
        assert collection.file_type is PlinkFileType.STANDARD_PED
        assert len(collection) == 2

    def test_raw_extension_read_as_text(self, write_ped, scenario_ped: Path):
        path = write_ped(scenario_ped.read_text(), filename="study.raw")
        collection = read_plink(path)
        assert collection.name == "study"
        assert collection.file_type is PlinkFileType.STANDARD_PED

    def test_binary_route(self, write_trio):
        bed = write_trio(["1 rsX 0 500 A G"], ["a", "b", "c", "d"], bytes([0x0B]))
        for member in (".bed", ".bim", ".fam"):
            collection = read_plink(bed.with_suffix(member))
            assert collection.file_type is PlinkFileType.BINARY_PED
            assert collection.n_samples == 4

    def test_unknown_extension_falls_back(self, write_ped, scenario_ped, log_messages):
        path = write_ped(scenario_ped.read_text(), filename="genotypes.txt")

        collection = read_plink(path)

        assert collection.file_type is PlinkFileType.STANDARD_PED
        assert collection.sample_names == ("sampleA", "sampleB")
        assert any(
            m.startswith("WARNING|") and "assuming ped format" in m
            for m in log_messages
        )

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError, match="PLINK file not found"):
            read_plink(tmp_path / "absent.bed")

    def test_accepts_string_path(self, scenario_ped: Path):
        assert read_plink(str(scenario_ped)).n_variants == 2
