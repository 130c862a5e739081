"""Catalog of export formats shown to users."""

from typing import Literal

from fusion_export.models.base import CamelModel
from fusion_export.models.options import DownloadFormat, DownloadOptions
from fusion_export.models.project import GeneratedApp

FormatCategory = Literal["archive", "config", "platform", "development"]
SizeClass = Literal["small", "medium", "large"]


class FormatOption(CamelModel):
    """Describes one export format."""

    format: DownloadFormat
    title: str
    description: str
    category: FormatCategory
    size: SizeClass
    recommended: bool = False
    badge: str | None = None


FORMAT_CATALOG: list[FormatOption] = [
    FormatOption(
        format=DownloadFormat.ZIP,
        title="ZIP Archive",
        description="Complete project in a compressed ZIP file",
        category="archive",
        size="medium",
        recommended=True,
        badge="Most Popular",
    ),
    FormatOption(
        format=DownloadFormat.TAR,
        title="TAR Archive",
        description="Unix-style TAR.GZ compressed archive",
        category="archive",
        size="medium",
    ),
    FormatOption(
        format=DownloadFormat.INDIVIDUAL,
        title="Individual Files",
        description="Download each file separately",
        category="archive",
        size="small",
    ),
    FormatOption(
        format=DownloadFormat.JSON,
        title="JSON Export",
        description="Project configuration and files in JSON format",
        category="config",
        size="small",
    ),
    FormatOption(
        format=DownloadFormat.YAML,
        title="YAML Export",
        description="Project configuration in YAML format",
        category="config",
        size="small",
    ),
    FormatOption(
        format=DownloadFormat.DOCKER,
        title="Docker Package",
        description="Complete Docker setup with containers",
        category="platform",
        size="large",
        badge="Production Ready",
    ),
    FormatOption(
        format=DownloadFormat.GITHUB_TEMPLATE,
        title="GitHub Template",
        description="Repository template with CI/CD workflows",
        category="platform",
        size="large",
        badge="Open Source",
    ),
    FormatOption(
        format=DownloadFormat.VSCODE_WORKSPACE,
        title="VS Code Workspace",
        description="Optimized for Visual Studio Code development",
        category="development",
        size="medium",
        badge="Developer Friendly",
    ),
    FormatOption(
        format=DownloadFormat.NPM_PACKAGE,
        title="NPM Package",
        description="Installable NPM package format",
        category="platform",
        size="medium",
    ),
    FormatOption(
        format=DownloadFormat.CODE_ONLY,
        title="Code Files Only",
        description="Source code without configuration files",
        category="config",
        size="small",
    ),
    FormatOption(
        format=DownloadFormat.CONFIG_ONLY,
        title="Configuration Only",
        description="Configuration and setup files only",
        category="config",
        size="small",
    ),
]

_SIZE_MULTIPLIERS: dict[str, float] = {"small": 1.0, "medium": 1.5, "large": 3.0}


def get_format_option(format: DownloadFormat) -> FormatOption:
    """Look up the catalog entry for a format."""
    for option in FORMAT_CATALOG:
        if option.format == format:
            return option
    raise KeyError(format)


def formats_by_category() -> dict[str, list[FormatOption]]:
    grouped: dict[str, list[FormatOption]] = {}
    for option in FORMAT_CATALOG:
        grouped.setdefault(option.category, []).append(option)
    return grouped


def estimate_size(app: GeneratedApp, options: DownloadOptions) -> int:
    """Rough output size in bytes, for display before exporting."""
    base = sum(len(f.content) for f in app.files)
    multiplier = _SIZE_MULTIPLIERS[get_format_option(options.format).size]
    if options.include_documentation:
        multiplier *= 1.2
    if options.include_tests:
        multiplier *= 1.5
    if options.include_docker_files:
        multiplier *= 1.3
    if options.include_cicd:
        multiplier *= 1.2
    return round(base * multiplier)
