"""Base classes for format packagers."""

from abc import ABC, abstractmethod

from fusion_export.core.naming import METADATA_FILENAME, output_filename
from fusion_export.models.options import DownloadFormat
from fusion_export.models.package import Deliverable, DeliveryUnit, DownloadPackage
from fusion_export.packagers.archive import ArchiveEntry, build_zip


def metadata_json(package: DownloadPackage) -> bytes:
    """Serialized package metadata, as embedded in archives."""
    return package.metadata.model_dump_json(by_alias=True, indent=2).encode("utf-8")


class BasePackager(ABC):
    """Serializes a resolved DownloadPackage into a Deliverable.

    Packagers are synchronous and free of side effects; delivery is the
    caller's job.
    """

    format: DownloadFormat

    @abstractmethod
    def package(self, package: DownloadPackage) -> Deliverable:
        """Serialize the package."""

    @property
    def is_archive(self) -> bool:
        """Whether the packager does CPU-bound compression."""
        return False


class ArchivePackager(BasePackager):
    """Single-archive formats.

    Subclasses add bundle-specific files through ``extra_files``; those
    replace any resolved file at the same path.
    """

    media_type = "application/zip"
    include_metadata = False

    def extra_files(self, package: DownloadPackage) -> dict[str, str]:
        return {}

    def build(self, entries: list[ArchiveEntry], level: int) -> bytes:
        return build_zip(entries, level)

    @property
    def is_archive(self) -> bool:
        return True

    def entries(self, package: DownloadPackage) -> list[ArchiveEntry]:
        """Archive entries sorted by path, metadata last."""
        contents = package.content_map()
        contents.update(self.extra_files(package))
        entries = [(path, contents[path].encode("utf-8")) for path in sorted(contents)]
        if self.include_metadata:
            entries.append((METADATA_FILENAME, metadata_json(package)))
        return entries

    def package(self, package: DownloadPackage) -> Deliverable:
        data = self.build(self.entries(package), package.options.compression_level)
        unit = DeliveryUnit(
            filename=output_filename(package.app.name, package.options),
            content=data,
            media_type=self.media_type,
        )
        return Deliverable(format=self.format, units=[unit])
