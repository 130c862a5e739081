"""Pytest configuration and fixtures."""

import pytest
from httpx import ASGITransport, AsyncClient

from fusion_export.core.jobs import get_job_manager
from fusion_export.main import app
from fusion_export.models.project import (
    ApiEndpoint,
    AppStack,
    GeneratedApp,
    GeneratedFile,
)


@pytest.fixture
def sample_app() -> GeneratedApp:
    """A small full-stack app with one frontend, one backend and one config file."""
    return GeneratedApp(
        name="My Cool App",
        description="A todo list for testing exports",
        stack=AppStack(
            frontend="react",
            backend="nodejs",
            database="postgresql",
            auth="jwt",
            deployment="vercel",
        ),
        files=[
            GeneratedFile(
                path="frontend/src/App.tsx",
                content="export const App = () => <h1>Todos</h1>;\n",
                file_type="frontend",
            ),
            GeneratedFile(
                path="backend/src/server.ts",
                content="import express from 'express';\nconst app = express();\n",
                file_type="backend",
            ),
            GeneratedFile(
                path="frontend/vite.config.ts",
                content="export default {};\n",
                file_type="config",
            ),
        ],
        features=["Todos", "Auth"],
        endpoints=[ApiEndpoint(method="GET", path="/api/todos", description="List todos")],
    )


@pytest.fixture
def empty_app() -> GeneratedApp:
    """An app without any files and without a database."""
    return GeneratedApp(
        name="Empty",
        stack=AppStack(database="none", auth="none"),
    )


@pytest.fixture
def sample_app_payload(sample_app: GeneratedApp) -> dict:
    """The sample app as the web client would send it."""
    return sample_app.model_dump(mode="json", by_alias=True)


@pytest.fixture
async def client() -> AsyncClient:
    """Create an async test client with a fresh job manager."""
    manager = get_job_manager()
    manager._records.clear()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    manager._records.clear()
