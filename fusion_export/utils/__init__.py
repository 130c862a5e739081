"""Utility functions for the export pipeline."""

from fusion_export.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
