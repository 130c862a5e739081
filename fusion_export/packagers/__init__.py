"""Format packagers and their registry."""

from typing import Any

from fusion_export.models.options import DownloadFormat
from fusion_export.packagers.archives import (
    CodeOnlyPackager,
    ConfigOnlyPackager,
    TarPackager,
    ZipPackager,
)
from fusion_export.packagers.base import ArchivePackager, BasePackager
from fusion_export.packagers.bundles import (
    DockerPackager,
    GitHubTemplatePackager,
    NpmPackagePackager,
    VSCodeWorkspacePackager,
)
from fusion_export.packagers.documents import JsonPackager, YamlPackager
from fusion_export.packagers.individual import IndividualPackager

PACKAGER_CLASSES: dict[DownloadFormat, type[BasePackager]] = {
    DownloadFormat.ZIP: ZipPackager,
    DownloadFormat.TAR: TarPackager,
    DownloadFormat.INDIVIDUAL: IndividualPackager,
    DownloadFormat.JSON: JsonPackager,
    DownloadFormat.YAML: YamlPackager,
    DownloadFormat.DOCKER: DockerPackager,
    DownloadFormat.GITHUB_TEMPLATE: GitHubTemplatePackager,
    DownloadFormat.VSCODE_WORKSPACE: VSCodeWorkspacePackager,
    DownloadFormat.NPM_PACKAGE: NpmPackagePackager,
    DownloadFormat.CODE_ONLY: CodeOnlyPackager,
    DownloadFormat.CONFIG_ONLY: ConfigOnlyPackager,
}


def get_packager(format: Any) -> BasePackager:
    """Instantiate the packager for a format.

    Raises:
        UnsupportedFormatError: the format is not one of DownloadFormat
    """
    return PACKAGER_CLASSES[DownloadFormat.parse(format)]()


__all__ = [
    "ArchivePackager",
    "BasePackager",
    "CodeOnlyPackager",
    "ConfigOnlyPackager",
    "DockerPackager",
    "GitHubTemplatePackager",
    "IndividualPackager",
    "JsonPackager",
    "NpmPackagePackager",
    "PACKAGER_CLASSES",
    "TarPackager",
    "VSCodeWorkspacePackager",
    "YamlPackager",
    "ZipPackager",
    "get_packager",
]
