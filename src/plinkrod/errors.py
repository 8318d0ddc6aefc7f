"""Exceptions raised while decoding PLINK files.

Missing inputs are reported with the built-in FileNotFoundError. Everything
else derives from PlinkError, which remembers the offending file so callers
can report it.
"""

from pathlib import Path


class PlinkError(Exception):
    """Base class for PLINK decoding errors.

    Attributes:
        message: Human-readable description of the problem.
        path: File being decoded when the error occurred, if known.
    """

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(message)

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message} (file: {self.path})"


class UnsupportedFormatError(PlinkError):
    """Input is a PLINK flavour this reader does not handle (e.g. recoded .raw)."""


class InvalidFormatError(PlinkError, ValueError):
    """Input violates the expected layout (bad variant name, malformed row)."""


class TruncatedRowError(PlinkError, IndexError):
    """A text data row has fewer genotype columns than the header declares."""


class PlinkReadError(PlinkError, OSError):
    """Reading an input file failed part way through."""
