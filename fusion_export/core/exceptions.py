"""Custom exceptions for the export pipeline."""

from typing import Any


class ExportError(Exception):
    """Base exception for the export pipeline."""

    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DuplicatePathError(ExportError):
    """Two files in one package share a path."""

    status_code = 422

    def __init__(self, path: str):
        super().__init__(f"Duplicate file path: {path}", {"path": path})
        self.path = path


class SerializationError(ExportError):
    """File content cannot be encoded into the target format."""

    status_code = 422

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Cannot serialize '{path}': {reason}",
            {"path": path, "reason": reason},
        )
        self.path = path


class UnsupportedFormatError(ExportError):
    """Requested download format is not one of the known formats."""

    status_code = 400

    def __init__(self, format_name: str):
        super().__init__(
            f"Unsupported download format: {format_name}",
            {"format": format_name},
        )
        self.format_name = format_name


class EmptyPackageError(ExportError):
    """Package contains no application files."""

    status_code = 422

    def __init__(self, app_name: str):
        super().__init__(
            f"Nothing to export for '{app_name}': no application files",
            {"app_name": app_name},
        )


class DeliveryError(ExportError):
    """Host environment refused the final handoff."""

    status_code = 502

    def __init__(self, filename: str, reason: str):
        super().__init__(
            f"Delivery of '{filename}' failed: {reason}",
            {"filename": filename, "reason": reason},
        )
        self.filename = filename


class JobNotFoundError(ExportError):
    """Bulk export job not found."""

    status_code = 404

    def __init__(self, job_id: str):
        super().__init__(f"Export job not found: {job_id}", {"job_id": job_id})


class JobStateError(ExportError):
    """Bulk export job cannot make the requested transition."""

    status_code = 409

    def __init__(self, job_id: str, status: str, action: str):
        super().__init__(
            f"Cannot {action} job {job_id} while it is {status}",
            {"job_id": job_id, "status": status, "action": action},
        )
