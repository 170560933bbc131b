"""Utility modules for gemmkit."""

from gemmkit.utils.logging import MultilineFormatter, setup_logging

__all__ = ["setup_logging", "MultilineFormatter"]
