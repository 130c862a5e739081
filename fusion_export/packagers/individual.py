"""Individual file downloads."""

from fusion_export.core.naming import METADATA_FILENAME, flatten_path, unique_filename
from fusion_export.models.options import DownloadFormat
from fusion_export.models.package import Deliverable, DeliveryUnit, DownloadPackage
from fusion_export.packagers.base import BasePackager, metadata_json


class IndividualPackager(BasePackager):
    """One delivery unit per file, metadata last.

    Paths are flattened (``src/app.ts`` -> ``src_app.ts``) since the
    destination is a flat downloads folder. When two paths flatten to the
    same name, the later one (in path order) gets a ``-2``, ``-3`` suffix.
    """

    format = DownloadFormat.INDIVIDUAL

    def package(self, package: DownloadPackage) -> Deliverable:
        used = {METADATA_FILENAME}
        units = [
            DeliveryUnit(
                filename=unique_filename(flatten_path(f.path), used),
                content=f.content.encode("utf-8"),
                media_type=f.media_type,
            )
            for f in package.files
        ]
        units.append(
            DeliveryUnit(
                filename=METADATA_FILENAME,
                content=metadata_json(package),
                media_type="application/json",
            )
        )
        return Deliverable(format=self.format, units=units, throttled=True)
