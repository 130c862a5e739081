"""Generated application data models."""

import re
from typing import Any, Literal

from pydantic import Field, computed_field, field_validator

from fusion_export.models.base import CamelModel

FileType = Literal["frontend", "backend", "database", "config"]


def slugify(name: str) -> str:
    """Lowercase a name and collapse whitespace runs into hyphens."""
    return re.sub(r"\s+", "-", name.strip().lower())


class GeneratedFile(CamelModel):
    """A single virtual file of a generated application."""

    path: str = Field(..., min_length=1)
    content: str = ""
    file_type: FileType = Field(default="frontend", alias="type")

    @field_validator("path")
    @classmethod
    def _normalize_path(cls, value: str) -> str:
        path = value.replace("\\", "/")
        while path.startswith("./"):
            path = path[2:]
        if path.startswith("/"):
            raise ValueError(f"path must be relative: {value}")
        segments = path.split("/")
        if any(segment in ("", "..") for segment in segments):
            raise ValueError(f"path has empty or parent segments: {value}")
        return path

    @computed_field  # type: ignore[prop-decorator]
    @property
    def size(self) -> int:
        """Byte length of the UTF-8 encoded content."""
        return len(self.content.encode("utf-8"))


class AppStack(CamelModel):
    """Technology selections for a generated application."""

    frontend: str = "react"
    backend: str = "nodejs"
    database: str = "none"
    auth: str = "none"
    deployment: str = "vercel"

    @property
    def has_database(self) -> bool:
        return bool(self.database) and self.database.lower() != "none"

    @property
    def has_auth(self) -> bool:
        return bool(self.auth) and self.auth.lower() != "none"


class ApiEndpoint(CamelModel):
    """An API endpoint exposed by the generated backend."""

    method: str
    path: str
    description: str = ""


class GeneratedApp(CamelModel):
    """Root aggregate handed to the export pipeline."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    stack: AppStack = Field(default_factory=AppStack)
    files: list[GeneratedFile] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    endpoints: list[ApiEndpoint] = Field(default_factory=list)
    deployment_config: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value

    @field_validator("features")
    @classmethod
    def _dedupe_features(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    @property
    def slug(self) -> str:
        """Filename-safe form of the app name."""
        return slugify(self.name)

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)
