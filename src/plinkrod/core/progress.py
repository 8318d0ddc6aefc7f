"""Row progress for the decoders.

Bars go to stderr so that tables printed on stdout stay parseable. Text
inputs are counted without a known total; binary inputs know their row count
from the .bim file up front.
"""

import sys
from collections.abc import Iterable, Iterator
from typing import TypeVar

import progressbar

T = TypeVar("T")


def _row_bar(label: str, total: int | None) -> progressbar.ProgressBar:
    if total is None:
        widgets = [
            f"{label}: ",
            progressbar.Counter(format="%(value)d rows"),
            " ",
            progressbar.AnimatedMarker(),
            " ",
            progressbar.Timer(),
        ]
        max_value = progressbar.UnknownLength
    else:
        widgets = [
            f"{label}: ",
            progressbar.Counter(),
            f"/{total} rows ",
            progressbar.Bar(),
            " ",
            progressbar.ETA(),
        ]
        max_value = total
    return progressbar.ProgressBar(max_value=max_value, widgets=widgets, fd=sys.stderr)


def _tracked(rows: Iterable[T], bar: progressbar.ProgressBar) -> Iterator[T]:
    bar.start()
    try:
        for count, row in enumerate(rows, 1):
            yield row
            bar.update(count)
    finally:
        # runs on exhaustion, early close and errors raised in the caller's loop
        bar.finish()


def track_rows(
    rows: Iterable[T],
    label: str,
    total: int | None = None,
    enabled: bool = False,
) -> Iterable[T]:
    """Count rows on a stderr progress bar while they are decoded.

    Args:
        rows: Rows being decoded (.bim variants with their codes, or .ped
            data lines).
        label: Prefix shown before the counter.
        total: Number of rows when known; None shows a running count.
        enabled: When False (or total is 0) rows are returned unwrapped.
    """
    if not enabled or total == 0:
        return rows
    return _tracked(rows, _row_bar(label, total))
