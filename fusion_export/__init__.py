"""Multi-format export pipeline for generated applications."""

__version__ = "0.1.0"
