"""Package manifests and environment files."""

import json

from fusion_export.generators.stack import backend_port, database_name, database_url
from fusion_export.models.project import GeneratedApp


def _dump(data: object) -> str:
    return json.dumps(data, indent=2) + "\n"


def generate_root_package_json(
    app: GeneratedApp,
    include_dependencies: bool = True,
    include_dev_dependencies: bool = True,
) -> str:
    """Generate the workspace-level package.json that drives both halves."""
    package: dict[str, object] = {
        "name": app.slug,
        "version": "1.0.0",
        "description": app.description,
        "private": True,
        "workspaces": ["frontend", "backend"],
        "scripts": {
            "dev": 'concurrently "npm run dev:backend" "npm run dev:frontend"',
            "dev:frontend": "npm run dev --workspace frontend",
            "dev:backend": "npm run dev --workspace backend",
            "build": "npm run build:backend && npm run build:frontend",
            "build:frontend": "npm run build --workspace frontend",
            "build:backend": "npm run build --workspace backend",
            "start": "npm run start:backend",
            "start:backend": "npm run start --workspace backend",
            "test": "npm test --workspaces --if-present",
        },
    }
    if include_dependencies:
        package["dependencies"] = {}
    if include_dev_dependencies:
        package["devDependencies"] = {"concurrently": "^8.2.0"}
    return _dump(package)


def generate_npm_package_json(app: GeneratedApp, scope: str) -> str:
    """Generate package.json for the installable npm package format."""
    return _dump(
        {
            "name": f"@{scope}/{app.slug}",
            "version": "1.0.0",
            "description": app.description,
            "main": "index.js",
            "bin": {app.slug: "index.js"},
            "scripts": {"postinstall": "node setup.js"},
            "keywords": [scope, "generated", *app.features[:5]],
            "author": "FlashFusion",
            "license": "MIT",
        }
    )


def generate_npmignore() -> str:
    return """src/
tests/
*.test.js
*.test.ts
.env
.vscode/
.github/
"""


def generate_npm_index(app: GeneratedApp) -> str:
    return f"""#!/usr/bin/env node
console.log('Setting up {app.name}...');
require('./setup.js');
"""


def generate_npm_setup_script(app: GeneratedApp) -> str:
    return f"""const fs = require('fs');
const path = require('path');

console.log('Setting up {app.name} project...');

const envExample = path.join(__dirname, '.env.example');
const envFile = path.join(__dirname, '.env');
if (fs.existsSync(envExample) && !fs.existsSync(envFile)) {{
  fs.copyFileSync(envExample, envFile);
  console.log('Created .env from .env.example');
}}

console.log('Setup complete!');
"""


def generate_environment_config(app: GeneratedApp) -> dict[str, str]:
    """Default environment variables for local development."""
    config = {
        "NODE_ENV": "development",
        "PORT": str(backend_port(app.stack)),
    }
    url = database_url(app.stack, database_name(app.name))
    if url:
        config["DATABASE_URL"] = url
    if app.stack.has_auth:
        config["JWT_SECRET"] = "your-secret-key"
    return config


def generate_env_example(app: GeneratedApp) -> str:
    """Render the environment defaults as a .env.example file."""
    config = generate_environment_config(app)
    return "".join(f"{key}={value}\n" for key, value in config.items())
