"""Utility helpers for plinkrod (logging setup, warning capture, run logs)."""

from plinkrod.utils.logging import collect_warnings, setup_logging, write_run_log

__all__ = ["collect_warnings", "setup_logging", "write_run_log"]
