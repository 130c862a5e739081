"""Deterministic archive writers.

Entries get fixed timestamps and ownership so identical input always
produces identical bytes.
"""

import gzip
import io
import stat
import tarfile
import zipfile
from collections.abc import Iterable

# Earliest timestamp a zip entry can carry
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

ArchiveEntry = tuple[str, bytes]


def file_mode(path: str) -> int:
    """Shell scripts are shipped executable."""
    return 0o755 if path.endswith(".sh") else 0o644


def build_zip(entries: Iterable[ArchiveEntry], level: int) -> bytes:
    """Write entries to a zip archive; level 0 stores without compression."""
    compress_type = zipfile.ZIP_STORED if level == 0 else zipfile.ZIP_DEFLATED
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=compress_type) as archive:
        for path, data in entries:
            info = zipfile.ZipInfo(path, date_time=_ZIP_EPOCH)
            info.compress_type = compress_type
            info.create_system = 3
            info.external_attr = (stat.S_IFREG | file_mode(path)) << 16
            if compress_type == zipfile.ZIP_DEFLATED:
                archive.writestr(info, data, compresslevel=level)
            else:
                archive.writestr(info, data)
    return buffer.getvalue()


def build_tarball(entries: Iterable[ArchiveEntry], level: int) -> bytes:
    """Write entries to a gzip-compressed tar archive."""
    buffer = io.BytesIO()
    with gzip.GzipFile(fileobj=buffer, mode="wb", compresslevel=level, mtime=0) as gz:
        with tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT) as archive:
            for path, data in entries:
                info = tarfile.TarInfo(path)
                info.size = len(data)
                info.mtime = 0
                info.mode = file_mode(path)
                info.uid = info.gid = 0
                info.uname = info.gname = ""
                archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()
