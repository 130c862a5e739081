"""Data models for the export pipeline."""

from fusion_export.models.formats import (
    FORMAT_CATALOG,
    FormatOption,
    estimate_size,
    get_format_option,
)
from fusion_export.models.jobs import (
    BulkExportJob,
    BulkExportRequest,
    JobItemError,
    JobStatus,
)
from fusion_export.models.options import (
    CompressionLevel,
    DownloadFormat,
    DownloadOptions,
    Platform,
)
from fusion_export.models.package import (
    Deliverable,
    DeliveryUnit,
    DownloadPackage,
    ExportResult,
    PackageFile,
    PackageMetadata,
)
from fusion_export.models.project import (
    ApiEndpoint,
    AppStack,
    GeneratedApp,
    GeneratedFile,
    slugify,
)

__all__ = [
    # Project models
    "ApiEndpoint",
    "AppStack",
    "GeneratedApp",
    "GeneratedFile",
    "slugify",
    # Option models
    "CompressionLevel",
    "DownloadFormat",
    "DownloadOptions",
    "Platform",
    # Package models
    "Deliverable",
    "DeliveryUnit",
    "DownloadPackage",
    "ExportResult",
    "PackageFile",
    "PackageMetadata",
    # Format catalog
    "FORMAT_CATALOG",
    "FormatOption",
    "estimate_size",
    "get_format_option",
    # Bulk export jobs
    "BulkExportJob",
    "BulkExportRequest",
    "JobItemError",
    "JobStatus",
]
