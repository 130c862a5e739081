"""Structured-document formats: JSON and YAML snapshots."""

import json
from typing import Any

import yaml

from fusion_export.core.exceptions import SerializationError
from fusion_export.core.naming import output_filename
from fusion_export.generators.docker import generate_docker_compose
from fusion_export.generators.manifests import (
    generate_environment_config,
    generate_root_package_json,
)
from fusion_export.models.options import DownloadFormat
from fusion_export.models.package import Deliverable, DeliveryUnit, DownloadPackage
from fusion_export.packagers.base import BasePackager


def build_export_document(package: DownloadPackage) -> dict[str, Any]:
    """Logical payload shared by the JSON and YAML formats."""
    app = package.app
    options = package.options
    return {
        "metadata": package.metadata.model_dump(mode="json", by_alias=True),
        "app": {
            "name": app.name,
            "description": app.description,
            "stack": app.stack.model_dump(by_alias=True),
            "features": list(app.features),
            "endpoints": [e.model_dump(by_alias=True) for e in app.endpoints],
            "deploymentConfig": app.deployment_config,
        },
        "files": package.content_map(),
        "configuration": {
            "package": generate_root_package_json(
                app,
                include_dependencies=options.include_dependencies,
                include_dev_dependencies=options.include_dev_dependencies,
            ),
            "docker": generate_docker_compose(app),
            "environment": generate_environment_config(app),
        },
    }


class _LiteralDumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line strings as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_LiteralDumper.add_representer(str, _represent_str)


class JsonPackager(BasePackager):
    format = DownloadFormat.JSON
    media_type = "application/json"

    def render(self, document: dict[str, Any]) -> str:
        return json.dumps(document, indent=2, ensure_ascii=False)

    def package(self, package: DownloadPackage) -> Deliverable:
        document = build_export_document(package)
        try:
            text = self.render(document)
        except (TypeError, ValueError, yaml.YAMLError) as e:
            raise SerializationError(package.app.name, str(e)) from e
        unit = DeliveryUnit(
            filename=output_filename(package.app.name, package.options),
            content=text.encode("utf-8"),
            media_type=self.media_type,
        )
        return Deliverable(format=self.format, units=[unit])


class YamlPackager(JsonPackager):
    format = DownloadFormat.YAML
    media_type = "application/x-yaml"

    def render(self, document: dict[str, Any]) -> str:
        return yaml.dump(
            document,
            Dumper=_LiteralDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )
