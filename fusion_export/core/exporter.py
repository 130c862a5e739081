"""Export orchestration.

Resolves the package, serializes it with the format's packager and hands
every resulting unit to a delivery adapter.
"""

import asyncio
import time

from fusion_export.config import Settings, get_settings
from fusion_export.core.exceptions import EmptyPackageError
from fusion_export.core.resolver import PackagingPolicyResolver
from fusion_export.delivery.base import DeliveryAdapter
from fusion_export.models.options import DownloadOptions
from fusion_export.models.package import Deliverable, DownloadPackage, ExportResult
from fusion_export.models.project import GeneratedApp
from fusion_export.packagers import BasePackager, get_packager
from fusion_export.utils.logging import get_logger


class ProjectExporter:
    """Runs the resolve -> package -> deliver pipeline for one app."""

    def __init__(
        self,
        resolver: PackagingPolicyResolver | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.resolver = resolver or PackagingPolicyResolver(self.settings.package_version)
        self.logger = get_logger("exporter")

    def resolve(self, app: GeneratedApp, options: DownloadOptions) -> DownloadPackage:
        package = self.resolver.resolve(app, options)
        if self.settings.reject_empty_packages and not any(
            f.origin == "app" for f in package.files
        ):
            raise EmptyPackageError(app.name)
        return package

    def build(self, app: GeneratedApp, options: DownloadOptions) -> Deliverable:
        """Resolve and package synchronously, without delivering anything."""
        package = self.resolve(app, options)
        return get_packager(options.format).package(package)

    async def export(
        self,
        app: GeneratedApp,
        options: DownloadOptions,
        delivery: DeliveryAdapter,
        delay_ms: int | None = None,
    ) -> ExportResult:
        """Export an application and deliver the result.

        Args:
            app: The generated application
            options: Format and inclusion options
            delivery: Destination for the produced units
            delay_ms: Pause between units of a throttled deliverable;
                defaults to ``settings.individual_delay_ms``

        Returns:
            Summary of what was delivered

        Raises:
            ExportError: resolving, packaging or delivery failed
        """
        started = time.perf_counter()
        package = self.resolve(app, options)
        packager = get_packager(options.format)

        deliverable = await self._package(packager, package)

        delay = self.settings.individual_delay_ms if delay_ms is None else delay_ms
        filenames: list[str] = []
        for index, unit in enumerate(deliverable.units):
            if index and deliverable.throttled and delay:
                await asyncio.sleep(delay / 1000)
            await delivery.deliver(unit.content, unit.filename, unit.media_type)
            filenames.append(unit.filename)

        result = ExportResult(
            format=options.format,
            filenames=filenames,
            total_files=package.metadata.total_files,
            total_size=package.metadata.total_size,
            bytes_delivered=deliverable.total_bytes,
            duration_ms=int((time.perf_counter() - started) * 1000),
        )

        self.logger.info(
            "export.completed",
            app=app.name,
            format=options.format.value,
            units=len(filenames),
            bytes_delivered=result.bytes_delivered,
            duration_ms=result.duration_ms,
        )
        return result

    async def _package(self, packager: BasePackager, package: DownloadPackage) -> Deliverable:
        # Compression is CPU-bound; keep it off the event loop
        if packager.is_archive:
            return await asyncio.to_thread(packager.package, package)
        return packager.package(package)


# Singleton instance
_exporter: ProjectExporter | None = None


def get_exporter() -> ProjectExporter:
    """Get the exporter singleton."""
    global _exporter
    if _exporter is None:
        _exporter = ProjectExporter()
    return _exporter
