"""Documentation and community files.

Every function here is pure: it takes the application (or nothing) and
returns the file content as a string.
"""

from fusion_export.models.project import GeneratedApp


def generate_readme(app: GeneratedApp) -> str:
    """Generate README.md."""
    features_list = "\n".join(f"- {feature}" for feature in app.features)
    if not features_list:
        features_list = "- Generated application scaffold"

    endpoints_section = ""
    if app.endpoints:
        rows = "\n".join(
            f"| `{e.method.upper()}` | `{e.path}` | {e.description} |"
            for e in app.endpoints
        )
        endpoints_section = f"""
## API Endpoints

| Method | Path | Description |
|--------|------|-------------|
{rows}
"""

    return f"""# {app.name}

{app.description}

## Features

{features_list}

## Tech Stack

- **Frontend**: {app.stack.frontend}
- **Backend**: {app.stack.backend}
- **Database**: {app.stack.database}
- **Auth**: {app.stack.auth}
- **Deployment**: {app.stack.deployment}
{endpoints_section}
## Getting Started

```bash
npm install
npm run dev
```

See [DEPLOYMENT.md](DEPLOYMENT.md) for deployment instructions.

---

Generated by FlashFusion
"""


def generate_deployment_guide(app: GeneratedApp) -> str:
    """Generate DEPLOYMENT.md."""
    return f"""# Deployment Guide

Deployment instructions for {app.name}.

## Target

This project is configured for **{app.stack.deployment}**.

## Steps

1. Install dependencies: `npm install`
2. Build: `npm run build`
3. Copy `.env.example` to `.env` and fill in real values
4. Deploy the build output to {app.stack.deployment}

## Docker

```bash
docker compose up --build
```
"""


def generate_gitignore() -> str:
    """Generate .gitignore."""
    return """node_modules/
.env
.env.local
dist/
build/
.next/
coverage/
__pycache__/
*.log
.DS_Store
"""


def generate_contributing_guide() -> str:
    return """# Contributing Guide

Thank you for your interest in contributing!

## Development Setup

1. Fork the repository
2. Clone your fork
3. Install dependencies: `npm install`
4. Start development: `npm run dev`

## Guidelines

- Follow the existing code style
- Add tests for new features
- Update documentation as needed
"""


def generate_code_of_conduct() -> str:
    return """# Code of Conduct

## Our Pledge

We pledge to make participation in our community a harassment-free experience for everyone.

## Standards

Examples of behavior that contributes to a positive environment:

- Being respectful of differing viewpoints
- Gracefully accepting constructive criticism
- Focusing on what is best for the community
"""


def generate_bug_report_template() -> str:
    return """---
name: Bug report
about: Create a report to help us improve
---

**Describe the bug**
A clear description of what the bug is.

**Steps to reproduce**
1. Go to '...'
2. Click on '....'
3. See error

**Expected behavior**
What you expected to happen.
"""


def generate_feature_request_template() -> str:
    return """---
name: Feature request
about: Suggest an idea for this project
---

**Is your feature request related to a problem?**
A clear description of what the problem is.

**Describe the solution you'd like**
A clear description of what you want to happen.
"""


def generate_pr_template() -> str:
    return """## Description

Brief description of changes

## Type of Change

- [ ] Bug fix
- [ ] New feature
- [ ] Breaking change
- [ ] Documentation update

## Testing

- [ ] Tests pass locally
- [ ] New tests added
"""
