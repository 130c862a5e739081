"""Platform bundles: archives with format-specific files on top."""

from fusion_export.config import settings
from fusion_export.generators.ci import generate_ci_workflow, generate_deploy_workflow
from fusion_export.generators.docker import (
    generate_backend_dockerfile,
    generate_docker_compose,
    generate_docker_deploy_script,
    generate_docker_setup_script,
    generate_dockerignore,
)
from fusion_export.generators.docs import (
    generate_bug_report_template,
    generate_code_of_conduct,
    generate_contributing_guide,
    generate_feature_request_template,
    generate_pr_template,
)
from fusion_export.generators.manifests import (
    generate_npm_index,
    generate_npm_package_json,
    generate_npm_setup_script,
    generate_npmignore,
)
from fusion_export.generators.vscode import generate_vscode_files
from fusion_export.models.options import DownloadFormat
from fusion_export.models.package import DownloadPackage
from fusion_export.packagers.base import ArchivePackager


class DockerPackager(ArchivePackager):
    """Project plus Dockerfile, dev/prod compose files and helper scripts."""

    format = DownloadFormat.DOCKER

    def extra_files(self, package: DownloadPackage) -> dict[str, str]:
        app = package.app
        return {
            "Dockerfile": generate_backend_dockerfile(app.stack),
            "docker-compose.yml": generate_docker_compose(app),
            "docker-compose.prod.yml": generate_docker_compose(app, production=True),
            ".dockerignore": generate_dockerignore(),
            "scripts/docker-setup.sh": generate_docker_setup_script(app),
            "scripts/docker-deploy.sh": generate_docker_deploy_script(app),
        }


class GitHubTemplatePackager(ArchivePackager):
    """Project laid out as a GitHub repository template."""

    format = DownloadFormat.GITHUB_TEMPLATE

    def extra_files(self, package: DownloadPackage) -> dict[str, str]:
        app = package.app
        return {
            ".github/workflows/ci.yml": generate_ci_workflow(app),
            ".github/workflows/deploy.yml": generate_deploy_workflow(app),
            ".github/ISSUE_TEMPLATE/bug_report.md": generate_bug_report_template(),
            ".github/ISSUE_TEMPLATE/feature_request.md": generate_feature_request_template(),
            ".github/PULL_REQUEST_TEMPLATE.md": generate_pr_template(),
            "CONTRIBUTING.md": generate_contributing_guide(),
            "CODE_OF_CONDUCT.md": generate_code_of_conduct(),
        }


class VSCodeWorkspacePackager(ArchivePackager):
    format = DownloadFormat.VSCODE_WORKSPACE

    def extra_files(self, package: DownloadPackage) -> dict[str, str]:
        return generate_vscode_files(package.app)


class NpmPackagePackager(ArchivePackager):
    """Project wrapped as an installable npm package."""

    format = DownloadFormat.NPM_PACKAGE

    def __init__(self, scope: str | None = None):
        self.scope = scope or settings.npm_scope

    def extra_files(self, package: DownloadPackage) -> dict[str, str]:
        app = package.app
        return {
            "package.json": generate_npm_package_json(app, self.scope),
            ".npmignore": generate_npmignore(),
            "index.js": generate_npm_index(app),
            "setup.js": generate_npm_setup_script(app),
        }
