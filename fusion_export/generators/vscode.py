"""VS Code workspace configuration."""

import json
from typing import Any

from fusion_export.generators.stack import backend_flavour, backend_port, is_nextjs
from fusion_export.models.project import GeneratedApp


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2) + "\n"


def generate_vscode_settings(app: GeneratedApp) -> dict[str, Any]:
    settings: dict[str, Any] = {
        "editor.formatOnSave": True,
        "editor.defaultFormatter": "esbenp.prettier-vscode",
        "typescript.preferences.importModuleSpecifier": "relative",
        "files.exclude": {"**/node_modules": True, "**/dist": True},
    }
    if backend_flavour(app.stack) == "python":
        settings["[python]"] = {"editor.defaultFormatter": "ms-python.black-formatter"}
    return settings


def generate_vscode_extensions(app: GeneratedApp) -> dict[str, Any]:
    recommendations = [
        "esbenp.prettier-vscode",
        "dbaeumer.vscode-eslint",
        "ms-vscode.vscode-typescript-next",
        "bradlc.vscode-tailwindcss",
    ]
    if backend_flavour(app.stack) == "python":
        recommendations += ["ms-python.python", "ms-python.black-formatter"]
    if app.stack.has_database:
        recommendations.append("mtxr.sqltools")
    recommendations.append("ms-azuretools.vscode-docker")
    return {"recommendations": recommendations}


def generate_vscode_tasks(app: GeneratedApp) -> dict[str, Any]:
    return {
        "version": "2.0.0",
        "tasks": [
            {
                "label": "dev",
                "type": "shell",
                "command": "npm run dev",
                "group": {"kind": "build", "isDefault": True},
                "problemMatcher": [],
            },
            {
                "label": "build",
                "type": "shell",
                "command": "npm run build",
                "group": "build",
            },
            {
                "label": "test",
                "type": "shell",
                "command": "npm test",
                "group": "test",
            },
        ],
    }


def generate_vscode_launch(app: GeneratedApp) -> dict[str, Any]:
    configurations: list[dict[str, Any]] = []
    if is_nextjs(app.stack):
        configurations.append(
            {
                "name": "Launch Frontend",
                "type": "node",
                "request": "launch",
                "runtimeExecutable": "npm",
                "runtimeArgs": ["run", "dev"],
                "cwd": "${workspaceFolder}/frontend",
            }
        )
    else:
        configurations.append(
            {
                "name": "Launch Frontend",
                "type": "chrome",
                "request": "launch",
                "url": "http://localhost:3000",
                "webRoot": "${workspaceFolder}/frontend/src",
            }
        )

    if backend_flavour(app.stack) == "python":
        configurations.append(
            {
                "name": "Launch Backend",
                "type": "debugpy",
                "request": "launch",
                "module": "uvicorn",
                "args": ["app:app", "--reload", "--port", str(backend_port(app.stack))],
                "cwd": "${workspaceFolder}/backend",
            }
        )
    else:
        configurations.append(
            {
                "name": "Launch Backend",
                "type": "node",
                "request": "launch",
                "program": "${workspaceFolder}/backend/src/index.ts",
                "env": {"PORT": str(backend_port(app.stack))},
            }
        )
    return {"version": "0.2.0", "configurations": configurations}


def generate_code_workspace(app: GeneratedApp) -> dict[str, Any]:
    """Multi-root workspace declaring the frontend and backend folders."""
    return {
        "folders": [
            {"name": "frontend", "path": "./frontend"},
            {"name": "backend", "path": "./backend"},
        ],
        "settings": generate_vscode_settings(app),
        "extensions": generate_vscode_extensions(app),
        "tasks": generate_vscode_tasks(app),
        "launch": generate_vscode_launch(app),
    }


def generate_vscode_files(app: GeneratedApp) -> dict[str, str]:
    """All VS Code files keyed by package path."""
    return {
        ".vscode/settings.json": dump_json(generate_vscode_settings(app)),
        ".vscode/extensions.json": dump_json(generate_vscode_extensions(app)),
        ".vscode/tasks.json": dump_json(generate_vscode_tasks(app)),
        ".vscode/launch.json": dump_json(generate_vscode_launch(app)),
        f"{app.slug}.code-workspace": dump_json(generate_code_workspace(app)),
    }
