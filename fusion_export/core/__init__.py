"""Core functionality for the export pipeline."""

from fusion_export.core.exceptions import (
    DeliveryError,
    DuplicatePathError,
    EmptyPackageError,
    ExportError,
    JobNotFoundError,
    JobStateError,
    SerializationError,
    UnsupportedFormatError,
)

__all__ = [
    "DeliveryError",
    "DuplicatePathError",
    "EmptyPackageError",
    "ExportError",
    "JobNotFoundError",
    "JobStateError",
    "SerializationError",
    "UnsupportedFormatError",
]
