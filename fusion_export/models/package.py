"""Resolved package and deliverable models."""

from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fusion_export.models.base import CamelModel
from fusion_export.models.options import DownloadFormat, DownloadOptions
from fusion_export.models.project import GeneratedApp

FileOrigin = Literal["app", "synthetic"]

_MEDIA_TYPES = {
    "js": "text/javascript",
    "jsx": "text/javascript",
    "ts": "text/typescript",
    "tsx": "text/typescript",
    "json": "application/json",
    "html": "text/html",
    "css": "text/css",
    "md": "text/markdown",
    "yml": "application/x-yaml",
    "yaml": "application/x-yaml",
    "xml": "application/xml",
    "txt": "text/plain",
    "py": "text/x-python",
    "sh": "application/x-sh",
}


def media_type_for(path: str) -> str:
    """Guess a media type from the file extension."""
    suffix = PurePosixPath(path).suffix.lstrip(".").lower()
    return _MEDIA_TYPES.get(suffix, "text/plain")


class PackageFile(CamelModel):
    """A file as it will appear in the exported package."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    size: int
    media_type: str = "text/plain"
    origin: FileOrigin = "app"


class PackageMetadata(CamelModel):
    """Summary embedded alongside every export."""

    model_config = ConfigDict(frozen=True)

    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    format: DownloadFormat
    total_files: int
    total_size: int
    app_name: str
    version: str = "1.0.0"


class DownloadPackage(BaseModel):
    """Resolved file set ready for a packager.

    Built fresh for every export request and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    files: list[PackageFile]
    metadata: PackageMetadata
    app: GeneratedApp
    options: DownloadOptions

    @property
    def format(self) -> DownloadFormat:
        return self.options.format

    @property
    def paths(self) -> list[str]:
        return [f.path for f in self.files]

    def content_map(self) -> dict[str, str]:
        """Map of path to content, in package order."""
        return {f.path: f.content for f in self.files}

    def get(self, path: str) -> PackageFile | None:
        for package_file in self.files:
            if package_file.path == path:
                return package_file
        return None


class DeliveryUnit(BaseModel):
    """One blob handed to a delivery adapter."""

    filename: str
    content: bytes
    media_type: str = "application/octet-stream"

    @property
    def size(self) -> int:
        return len(self.content)


class Deliverable(BaseModel):
    """Packager output: one or more delivery units."""

    format: DownloadFormat
    units: list[DeliveryUnit]
    # Emit units with a pause between them (individual downloads)
    throttled: bool = False

    @property
    def total_bytes(self) -> int:
        return sum(unit.size for unit in self.units)


class ExportResult(CamelModel):
    """What an export delivered."""

    format: DownloadFormat
    filenames: list[str] = Field(default_factory=list)
    total_files: int = 0
    total_size: int = 0
    bytes_delivered: int = 0
    duration_ms: int = 0
