"""Plain archive formats: zip, tar and the filtered subsets."""

from fusion_export.models.options import DownloadFormat
from fusion_export.packagers.archive import ArchiveEntry, build_tarball
from fusion_export.packagers.base import ArchivePackager


class ZipPackager(ArchivePackager):
    """Full project plus the metadata entry."""

    format = DownloadFormat.ZIP
    include_metadata = True


class TarPackager(ArchivePackager):
    """Same entries as zip, written as a real gzip-compressed tarball."""

    format = DownloadFormat.TAR
    media_type = "application/gzip"
    include_metadata = True

    def build(self, entries: list[ArchiveEntry], level: int) -> bytes:
        return build_tarball(entries, level)


class CodeOnlyPackager(ArchivePackager):
    # The resolver has already filtered the files
    format = DownloadFormat.CODE_ONLY


class ConfigOnlyPackager(ArchivePackager):
    format = DownloadFormat.CONFIG_ONLY
