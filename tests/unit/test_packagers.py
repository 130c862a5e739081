"""Unit tests for format packagers."""

import io
import json
import tarfile
import zipfile

import pytest
import yaml

from fusion_export.core.exceptions import UnsupportedFormatError
from fusion_export.core.naming import METADATA_FILENAME
from fusion_export.core.resolver import resolve
from fusion_export.models.options import DownloadFormat, DownloadOptions
from fusion_export.models.project import GeneratedApp, GeneratedFile
from fusion_export.packagers import PACKAGER_CLASSES, get_packager

ALL_OFF = dict(
    include_documentation=False,
    include_tests=False,
    include_docker_files=False,
    include_git_files=False,
    include_vscode_config=False,
    include_cicd=False,
)


def _package(app: GeneratedApp, **options):
    opts = DownloadOptions(**options)
    return get_packager(opts.format).package(resolve(app, opts))


def _zip(deliverable) -> zipfile.ZipFile:
    assert len(deliverable.units) == 1
    return zipfile.ZipFile(io.BytesIO(deliverable.units[0].content))


class TestRegistry:
    """Tests for packager lookup."""

    def test_every_format_has_a_packager(self):
        assert set(PACKAGER_CLASSES) == set(DownloadFormat)

    def test_lookup_by_string(self):
        assert get_packager("yaml").format == DownloadFormat.YAML

    def test_unknown_format(self):
        with pytest.raises(UnsupportedFormatError):
            get_packager("rar")


class TestZipPackager:
    """Tests for the zip format."""

    def test_contains_resolved_files_and_metadata_last(self, sample_app: GeneratedApp):
        opts = DownloadOptions()
        package = resolve(sample_app, opts)
        deliverable = get_packager(opts.format).package(package)

        unit = deliverable.units[0]
        assert unit.filename == "my-cool-app-zip.zip"
        assert unit.media_type == "application/zip"

        names = _zip(deliverable).namelist()
        assert names[-1] == METADATA_FILENAME
        assert names[:-1] == package.paths

    def test_content_round_trips(self, sample_app: GeneratedApp):
        archive = _zip(_package(sample_app))
        assert archive.read("frontend/src/App.tsx").decode() == sample_app.files[0].content
        metadata = json.loads(archive.read(METADATA_FILENAME))
        assert metadata["appName"] == "My Cool App"
        assert metadata["format"] == "zip"

    def test_zero_file_app(self, empty_app: GeneratedApp):
        archive = _zip(
            _package(
                empty_app,
                include_documentation=False,
                include_git_files=False,
            )
        )
        assert archive.namelist() == ["docker-compose.yml", "package.json", METADATA_FILENAME]

    def test_compression_none_stores(self, sample_app: GeneratedApp):
        archive = _zip(_package(sample_app, compression="none"))
        assert all(info.compress_type == zipfile.ZIP_STORED for info in archive.infolist())

    def test_compression_deflates(self, sample_app: GeneratedApp):
        archive = _zip(_package(sample_app, compression="maximum"))
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())

    def test_deterministic_bytes(self, sample_app: GeneratedApp):
        opts = DownloadOptions()
        package = resolve(sample_app, opts)
        packager = get_packager(opts.format)
        assert packager.package(package).units[0].content == packager.package(package).units[0].content

    def test_custom_name(self, sample_app: GeneratedApp):
        deliverable = _package(sample_app, custom_name="release.zip")
        assert deliverable.units[0].filename == "release.zip"


class TestTarPackager:
    """Tests for the tar format."""

    def test_real_gzipped_tarball(self, sample_app: GeneratedApp):
        deliverable = _package(sample_app, format="tar", include_docker_files=True)
        unit = deliverable.units[0]
        assert unit.filename == "my-cool-app-tar.tar.gz"
        assert unit.content[:2] == b"\x1f\x8b"

        with tarfile.open(fileobj=io.BytesIO(unit.content), mode="r:gz") as archive:
            names = archive.getnames()
            assert names[-1] == METADATA_FILENAME
            assert "frontend/src/App.tsx" in names
            member = archive.getmember("backend/src/server.ts")
            assert archive.extractfile(member).read() == sample_app.files[1].content.encode()


class TestDocumentPackagers:
    """Tests for JSON and YAML snapshots."""

    def test_json_snapshot(self, sample_app: GeneratedApp):
        deliverable = _package(sample_app, format="json")
        unit = deliverable.units[0]
        assert unit.filename == "my-cool-app-export.json"
        assert unit.media_type == "application/json"

        document = json.loads(unit.content)
        assert document["app"]["name"] == "My Cool App"
        assert document["app"]["stack"]["database"] == "postgresql"
        assert document["app"]["deploymentConfig"] == {}
        app_files = {f.path: f.content for f in sample_app.files}
        assert {path: document["files"][path] for path in app_files} == app_files
        assert document["metadata"]["totalFiles"] == len(document["files"])
        configuration = document["configuration"]
        assert json.loads(configuration["package"])["name"] == "my-cool-app"
        assert "postgres:15" in configuration["docker"]
        assert configuration["environment"]["PORT"] == "3001"

    def test_yaml_snapshot_parses_back(self, sample_app: GeneratedApp):
        json_doc = json.loads(_package(sample_app, format="json").units[0].content)
        unit = _package(sample_app, format="yaml").units[0]
        assert unit.filename == "my-cool-app-export.yaml"

        document = yaml.safe_load(unit.content.decode("utf-8"))
        assert document["files"] == json_doc["files"]
        assert document["app"] == json_doc["app"]
        assert document["configuration"] == json_doc["configuration"]

    def test_yaml_multiline_literal_blocks(self, sample_app: GeneratedApp):
        text = _package(sample_app, format="yaml").units[0].content.decode("utf-8")
        assert "backend/src/server.ts: |" in text

    def test_json_keeps_unicode(self):
        app = GeneratedApp(name="Ünicode", files=[])
        unit = _package(app, format="json").units[0]
        assert "Ünicode".encode("utf-8") in unit.content


class TestIndividualPackager:
    """Tests for individual file downloads."""

    def test_flattened_units_metadata_last(self, sample_app: GeneratedApp):
        opts = DownloadOptions(format="individual")
        package = resolve(sample_app, opts)
        deliverable = get_packager(opts.format).package(package)

        assert deliverable.throttled is True
        names = [unit.filename for unit in deliverable.units]
        assert names[-1] == METADATA_FILENAME
        assert len(names) == len(package.files) + 1
        assert "frontend_src_App.tsx" in names
        assert all("/" not in name for name in names)

    def test_colliding_flattened_names_get_suffixes(self):
        app = GeneratedApp(
            name="flat",
            files=[
                GeneratedFile(path="a/b.txt", content="nested"),
                GeneratedFile(path="a_b.txt", content="top level"),
            ],
        )
        deliverable = _package(app, format="individual", **ALL_OFF)

        units = {unit.filename: unit.content for unit in deliverable.units}
        assert len(units) == len(deliverable.units)
        assert units["a_b.txt"] == b"nested"
        assert units["a_b-2.txt"] == b"top level"
        assert deliverable.units[-1].filename == METADATA_FILENAME

    def test_only_individual_is_throttled(self, sample_app: GeneratedApp):
        assert _package(sample_app).throttled is False


class TestBundlePackagers:
    """Tests for the platform bundles."""

    def test_docker_bundle(self, sample_app: GeneratedApp):
        deliverable = _package(sample_app, format="docker")
        assert deliverable.units[0].filename == "my-cool-app-docker-package.zip"

        archive = _zip(deliverable)
        names = archive.namelist()
        for path in (
            "Dockerfile",
            "docker-compose.yml",
            "docker-compose.prod.yml",
            ".dockerignore",
            "scripts/docker-setup.sh",
            "scripts/docker-deploy.sh",
        ):
            assert path in names
        assert METADATA_FILENAME not in names

        prod = yaml.safe_load(archive.read("docker-compose.prod.yml"))
        assert prod["services"]["backend"]["restart"] == "always"

    def test_scripts_are_executable(self, sample_app: GeneratedApp):
        archive = _zip(_package(sample_app, format="docker"))
        mode = archive.getinfo("scripts/docker-setup.sh").external_attr >> 16
        assert mode & 0o777 == 0o755
        manifest_mode = archive.getinfo("package.json").external_attr >> 16
        assert manifest_mode & 0o777 == 0o644

    def test_github_template(self, sample_app: GeneratedApp):
        deliverable = _package(sample_app, format="github-template")
        assert deliverable.units[0].filename == "my-cool-app-github-template.zip"
        names = _zip(deliverable).namelist()
        for path in (
            ".github/workflows/ci.yml",
            ".github/workflows/deploy.yml",
            ".github/ISSUE_TEMPLATE/bug_report.md",
            ".github/ISSUE_TEMPLATE/feature_request.md",
            ".github/PULL_REQUEST_TEMPLATE.md",
            "CONTRIBUTING.md",
            "CODE_OF_CONDUCT.md",
        ):
            assert path in names

    def test_vscode_workspace(self, sample_app: GeneratedApp):
        archive = _zip(_package(sample_app, format="vscode-workspace"))
        workspace = json.loads(archive.read("my-cool-app.code-workspace"))
        assert [folder["name"] for folder in workspace["folders"]] == ["frontend", "backend"]
        assert ".vscode/extensions.json" in archive.namelist()

    def test_npm_package_overlays_package_json(self, sample_app: GeneratedApp):
        archive = _zip(_package(sample_app, format="npm-package"))
        manifest = json.loads(archive.read("package.json"))
        assert manifest["name"] == "@flashfusion/my-cool-app"
        assert manifest["scripts"]["postinstall"] == "node setup.js"
        assert archive.namelist().count("package.json") == 1
        for path in (".npmignore", "index.js", "setup.js"):
            assert path in archive.namelist()

    def test_code_only_archive(self, sample_app: GeneratedApp):
        deliverable = _package(sample_app, format="code-only")
        assert deliverable.units[0].filename == "my-cool-app-code-only.zip"
        assert "package.json" not in _zip(deliverable).namelist()

    def test_config_only_archive(self, sample_app: GeneratedApp):
        deliverable = _package(sample_app, format="config-only")
        assert deliverable.units[0].filename == "my-cool-app-config-only.zip"
        assert ".env.example" in _zip(deliverable).namelist()
