"""Single-app export endpoints."""

from fastapi import APIRouter, Response
from pydantic import Field

from fusion_export.api.deps import ExporterDep
from fusion_export.api.responses import attachment
from fusion_export.delivery.memory import MemoryDelivery
from fusion_export.models.base import CamelModel
from fusion_export.models.formats import FORMAT_CATALOG, FormatOption, estimate_size
from fusion_export.models.options import DownloadFormat, DownloadOptions
from fusion_export.models.package import FileOrigin, PackageMetadata
from fusion_export.models.project import GeneratedApp

router = APIRouter()


class ExportRequest(CamelModel):
    """An application plus the options to export it with."""

    app: GeneratedApp
    options: DownloadOptions = Field(default_factory=DownloadOptions)


class EstimateResponse(CamelModel):
    format: DownloadFormat
    estimated_size: int


class FileSummary(CamelModel):
    path: str
    size: int
    media_type: str
    origin: FileOrigin


class ResolveResponse(CamelModel):
    """Resolved file list, without contents."""

    metadata: PackageMetadata
    files: list[FileSummary]


class UnitPayload(CamelModel):
    filename: str
    media_type: str
    size: int
    content: str


class IndividualExportResponse(CamelModel):
    format: DownloadFormat
    units: list[UnitPayload]


@router.get(
    "/formats",
    response_model=list[FormatOption],
    summary="List export formats",
)
async def list_formats() -> list[FormatOption]:
    return FORMAT_CATALOG


@router.post(
    "/estimate",
    response_model=EstimateResponse,
    summary="Estimate export size",
)
async def estimate_export(data: ExportRequest) -> EstimateResponse:
    """Rough output size for the chosen format and options."""
    return EstimateResponse(
        format=data.options.format,
        estimated_size=estimate_size(data.app, data.options),
    )


@router.post(
    "/resolve",
    response_model=ResolveResponse,
    summary="Preview the exported file list",
)
async def resolve_export(data: ExportRequest, exporter: ExporterDep) -> ResolveResponse:
    package = exporter.resolve(data.app, data.options)
    return ResolveResponse(
        metadata=package.metadata,
        files=[
            FileSummary(path=f.path, size=f.size, media_type=f.media_type, origin=f.origin)
            for f in package.files
        ],
    )


@router.post(
    "",
    summary="Export an application",
    description=(
        "Returns the artifact bytes as an attachment. The individual format "
        "returns a JSON list of files instead."
    ),
)
async def export_app(data: ExportRequest, exporter: ExporterDep) -> Response:
    """Export one application in the requested format."""
    delivery = MemoryDelivery()
    # Browsers pace individual downloads themselves
    await exporter.export(data.app, data.options, delivery, delay_ms=0)

    if data.options.format == DownloadFormat.INDIVIDUAL:
        payload = IndividualExportResponse(
            format=data.options.format,
            units=[
                UnitPayload(
                    filename=unit.filename,
                    media_type=unit.media_type,
                    size=unit.size,
                    content=unit.content.decode("utf-8"),
                )
                for unit in delivery.units
            ],
        )
        return Response(
            content=payload.model_dump_json(by_alias=True),
            media_type="application/json",
        )

    return attachment(delivery.units[0])
