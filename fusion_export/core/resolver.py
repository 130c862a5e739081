"""Packaging policy resolver.

Expands a generated application and a set of download options into the
exact file list a packager will serialize.
"""

from fusion_export.config import settings
from fusion_export.core.exceptions import DuplicatePathError, SerializationError
from fusion_export.core.filters import keep_for_code_only, keep_for_config_only
from fusion_export.core.naming import METADATA_FILENAME, METADATA_FORMATS
from fusion_export.generators.ci import generate_ci_workflow, generate_platform_deploy_workflow
from fusion_export.generators.docker import (
    generate_backend_dockerfile,
    generate_docker_compose,
    generate_dockerignore,
    generate_frontend_dockerfile,
    generate_nginx_config,
    needs_nginx_config,
)
from fusion_export.generators.docs import (
    generate_deployment_guide,
    generate_gitignore,
    generate_readme,
)
from fusion_export.generators.manifests import generate_env_example, generate_root_package_json
from fusion_export.generators.scaffold import TEST_SCAFFOLD_PATH, generate_test_scaffold
from fusion_export.generators.vscode import generate_vscode_files
from fusion_export.models.options import DownloadFormat, DownloadOptions
from fusion_export.models.package import (
    DownloadPackage,
    FileOrigin,
    PackageFile,
    PackageMetadata,
    media_type_for,
)
from fusion_export.models.project import GeneratedApp
from fusion_export.utils.logging import get_logger

logger = get_logger(__name__)


def encode_file(path: str, content: str, origin: FileOrigin = "app") -> PackageFile:
    """Build a PackageFile, measuring the UTF-8 size of its content."""
    try:
        size = len(content.encode("utf-8"))
    except UnicodeEncodeError as e:
        raise SerializationError(path, f"content is not valid UTF-8 ({e.reason})") from e
    return PackageFile(
        path=path,
        content=content,
        size=size,
        media_type=media_type_for(path),
        origin=origin,
    )


class _FileSet:
    """Accumulates package files for one resolution."""

    def __init__(self, reserved: frozenset[str] = frozenset()) -> None:
        self._files: dict[str, PackageFile] = {}
        self._reserved = reserved

    def add_app_file(self, path: str, content: str) -> None:
        if path in self._files or path in self._reserved:
            raise DuplicatePathError(path)
        self._files[path] = encode_file(path, content, "app")

    def add_synthetic(self, path: str, content: str) -> None:
        """Add a generated file unless the application already ships that path."""
        if path in self._files:
            logger.debug("export.synthetic_skipped", path=path)
            return
        self._files[path] = encode_file(path, content, "synthetic")

    def sorted(self) -> list[PackageFile]:
        return [self._files[path] for path in sorted(self._files)]


class PackagingPolicyResolver:
    """Turns (app, options) into a DownloadPackage."""

    def __init__(self, version: str | None = None):
        self.version = version or settings.package_version

    def resolve(self, app: GeneratedApp, options: DownloadOptions) -> DownloadPackage:
        """Resolve the final file set for an export request.

        Raises:
            DuplicatePathError: two application files share a path, or an
                application file uses the metadata entry's path
            SerializationError: a file's content cannot be UTF-8 encoded
        """
        reserved = frozenset()
        if options.format in METADATA_FORMATS:
            reserved = frozenset({METADATA_FILENAME})
        file_set = _FileSet(reserved)
        for generated in app.files:
            file_set.add_app_file(generated.path, generated.content)

        self._add_optional_files(file_set, app, options)

        # Always present: workspace manifest and service topology
        file_set.add_synthetic(
            "package.json",
            generate_root_package_json(
                app,
                include_dependencies=options.include_dependencies,
                include_dev_dependencies=options.include_dev_dependencies,
            ),
        )
        file_set.add_synthetic("docker-compose.yml", generate_docker_compose(app))

        files = self._apply_format_filter(file_set.sorted(), app, options)

        metadata = PackageMetadata(
            format=options.format,
            total_files=len(files),
            total_size=sum(f.size for f in files),
            app_name=app.name,
            version=self.version,
        )

        logger.info(
            "export.resolved",
            app=app.name,
            format=options.format.value,
            total_files=metadata.total_files,
            total_size=metadata.total_size,
        )

        return DownloadPackage(files=files, metadata=metadata, app=app, options=options)

    def _add_optional_files(
        self, file_set: _FileSet, app: GeneratedApp, options: DownloadOptions
    ) -> None:
        if options.include_documentation:
            file_set.add_synthetic("README.md", generate_readme(app))
            file_set.add_synthetic("DEPLOYMENT.md", generate_deployment_guide(app))

        if options.include_git_files:
            file_set.add_synthetic(".gitignore", generate_gitignore())

        if options.include_vscode_config:
            for path, content in generate_vscode_files(app).items():
                file_set.add_synthetic(path, content)

        if options.include_docker_files:
            file_set.add_synthetic("Dockerfile", generate_backend_dockerfile(app.stack))
            file_set.add_synthetic("frontend/Dockerfile", generate_frontend_dockerfile(app.stack))
            if needs_nginx_config(app.stack):
                file_set.add_synthetic("frontend/nginx.conf", generate_nginx_config(app.stack))
            file_set.add_synthetic(".dockerignore", generate_dockerignore())

        if options.include_cicd:
            file_set.add_synthetic(".github/workflows/ci.yml", generate_ci_workflow(app))
            if options.platform_specific:
                file_set.add_synthetic(
                    f".github/workflows/deploy-{options.platform_specific}.yml",
                    generate_platform_deploy_workflow(app, options.platform_specific),
                )

        if options.include_tests:
            file_set.add_synthetic(TEST_SCAFFOLD_PATH, generate_test_scaffold(app))

        if options.include_node_modules:
            logger.debug("export.node_modules_ignored", app=app.name)

    def _apply_format_filter(
        self, files: list[PackageFile], app: GeneratedApp, options: DownloadOptions
    ) -> list[PackageFile]:
        if options.format == DownloadFormat.CODE_ONLY:
            return [f for f in files if keep_for_code_only(f.path)]

        if options.format == DownloadFormat.CONFIG_ONLY:
            kept = {f.path: f for f in files if keep_for_config_only(f.path)}
            required = {
                "package.json": lambda: generate_root_package_json(
                    app,
                    include_dependencies=options.include_dependencies,
                    include_dev_dependencies=options.include_dev_dependencies,
                ),
                "docker-compose.yml": lambda: generate_docker_compose(app),
                ".env.example": lambda: generate_env_example(app),
            }
            for path, generate in required.items():
                if path not in kept:
                    kept[path] = encode_file(path, generate(), "synthetic")
            return [kept[path] for path in sorted(kept)]

        return files


def resolve(app: GeneratedApp, options: DownloadOptions) -> DownloadPackage:
    """Resolve with a default resolver."""
    return PackagingPolicyResolver().resolve(app, options)
