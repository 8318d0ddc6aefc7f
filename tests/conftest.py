"""Pytest fixtures for the plinkrod test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest
from loguru import logger

# =============================================================================
# Test Tier System
# =============================================================================
#
# tier0 - Fast unit tests
#   - Pure parsing/codec tests on small files written to tmp_path
#   - Run: pytest -m tier0
#
# tier1 - Cross-checks
#   - Decodes .bed trios written independently by bed-reader
#   - Run: pytest -m tier1
#
# Quick reference:
#   pytest -m tier0           # Fast tests only
#   pytest                    # All tests
# =============================================================================

SCENARIO_PED = (
    "#Individual ID\tSNP1|c1_p100\tSNP2|c1_p50\n"
    "sampleA\tA A\tC G\n"
    "sampleB\tA T\t0 0\n"
)


@pytest.fixture
def write_ped(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing text PLINK content to tmp_path.

    Returns:
        Function (content, filename="test.ped") -> Path
    """

    def _write(content: str, filename: str = "test.ped") -> Path:
        path = tmp_path / filename
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def scenario_ped(write_ped) -> Path:
    """Two variants listed out of location order, two samples."""
    return write_ped(SCENARIO_PED)


@pytest.fixture
def write_trio(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a .bed/.bim/.fam trio to tmp_path.

    Returns:
        Function (bim_rows, samples, bed_payload, mode=1, prefix="test")
        -> Path of the .bed file. bim_rows are whitespace-joined lines,
        samples become "fam<i> <sample> 0 0 0 -9" rows, and bed_payload is
        written after the 3-byte header.
    """

    def _write(
        bim_rows: Sequence[str],
        samples: Sequence[str],
        bed_payload: bytes,
        mode: int = 1,
        prefix: str = "test",
    ) -> Path:
        base = tmp_path / prefix
        Path(f"{base}.bim").write_text("".join(f"{row}\n" for row in bim_rows))
        Path(f"{base}.fam").write_text(
            "".join(f"fam{i} {s} 0 0 0 -9\n" for i, s in enumerate(samples))
        )
        bed = Path(f"{base}.bed")
        bed.write_bytes(bytes([0x6C, 0x1B, mode]) + bed_payload)
        return bed

    return _write


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru output as "LEVEL|message" strings."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda msg: messages.append(msg.rstrip("\n")),
        level="DEBUG",
        format="{level}|{message}",
    )
    yield messages
    logger.remove(handler_id)
