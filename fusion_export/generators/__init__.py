"""Generators for synthetic project files.

Each generator is a pure function of the application (or of nothing) that
returns file content; none of them touch the filesystem.
"""

from fusion_export.generators.ci import (
    generate_ci_workflow,
    generate_deploy_workflow,
    generate_platform_deploy_workflow,
)
from fusion_export.generators.docker import (
    generate_backend_dockerfile,
    generate_docker_compose,
    generate_dockerignore,
    generate_frontend_dockerfile,
)
from fusion_export.generators.docs import (
    generate_deployment_guide,
    generate_gitignore,
    generate_readme,
)
from fusion_export.generators.manifests import (
    generate_env_example,
    generate_environment_config,
    generate_root_package_json,
)
from fusion_export.generators.scaffold import generate_test_scaffold
from fusion_export.generators.vscode import generate_vscode_files

__all__ = [
    "generate_backend_dockerfile",
    "generate_ci_workflow",
    "generate_deploy_workflow",
    "generate_deployment_guide",
    "generate_docker_compose",
    "generate_dockerignore",
    "generate_env_example",
    "generate_environment_config",
    "generate_frontend_dockerfile",
    "generate_gitignore",
    "generate_platform_deploy_workflow",
    "generate_readme",
    "generate_root_package_json",
    "generate_test_scaffold",
    "generate_vscode_files",
]
