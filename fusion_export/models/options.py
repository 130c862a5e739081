"""Download request models."""

from enum import Enum
from typing import Any, Literal

from pydantic import ConfigDict, field_validator

from fusion_export.core.exceptions import UnsupportedFormatError
from fusion_export.models.base import CamelModel

Platform = Literal["vercel", "netlify", "railway", "heroku", "aws", "azure", "gcp"]


class DownloadFormat(str, Enum):
    """Output shape of an export."""

    ZIP = "zip"
    TAR = "tar"
    INDIVIDUAL = "individual"
    JSON = "json"
    YAML = "yaml"
    DOCKER = "docker"
    GITHUB_TEMPLATE = "github-template"
    VSCODE_WORKSPACE = "vscode-workspace"
    NPM_PACKAGE = "npm-package"
    CODE_ONLY = "code-only"
    CONFIG_ONLY = "config-only"

    @classmethod
    def parse(cls, value: Any) -> "DownloadFormat":
        """Resolve a raw value to a format or raise UnsupportedFormatError."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedFormatError(str(value)) from None


class CompressionLevel(str, Enum):
    """Named compression presets for archive formats."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    MAXIMUM = "maximum"

    @property
    def level(self) -> int:
        """Numeric deflate level for this preset."""
        return _COMPRESSION_LEVELS[self]


_COMPRESSION_LEVELS = {
    CompressionLevel.NONE: 0,
    CompressionLevel.LOW: 2,
    CompressionLevel.MEDIUM: 4,
    CompressionLevel.HIGH: 6,
    CompressionLevel.MAXIMUM: 9,
}


class DownloadOptions(CamelModel):
    """Everything a caller can choose about an export."""

    model_config = ConfigDict(frozen=True)

    format: DownloadFormat = DownloadFormat.ZIP
    compression: CompressionLevel = CompressionLevel.MEDIUM

    include_documentation: bool = True
    include_tests: bool = False
    include_docker_files: bool = False
    include_git_files: bool = True
    include_vscode_config: bool = False
    include_cicd: bool = False
    include_dependencies: bool = True
    include_dev_dependencies: bool = False
    # node_modules are never materialized; accepted for client compatibility
    include_node_modules: bool = False

    platform_specific: Platform | None = None
    custom_name: str | None = None

    @field_validator("format", mode="before")
    @classmethod
    def _known_format(cls, value: Any) -> DownloadFormat:
        return DownloadFormat.parse(value)

    @field_validator("custom_name")
    @classmethod
    def _blank_name_is_none(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            return None
        return value

    @property
    def compression_level(self) -> int:
        return self.compression.level
