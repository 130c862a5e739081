"""Classification of free-form stack identifiers."""

import re
from dataclasses import dataclass
from typing import Literal

from fusion_export.models.project import AppStack

BackendFlavour = Literal["node", "python", "generic"]

_NODE_MARKERS = ("node", "express", "nest", "fastify", "koa")
_PYTHON_MARKERS = ("python", "fastapi", "django", "flask")
_IMAGE_UNSAFE = re.compile(r"[^a-z0-9._-]+")

_BACKEND_PORTS: dict[str, int] = {"node": 3001, "python": 8000, "generic": 8080}


@dataclass(frozen=True)
class DatabaseService:
    """Container settings for the app database."""

    image: str
    port: int
    volume: str
    data_dir: str
    url_scheme: str
    environment: dict[str, str]


def backend_flavour(stack: AppStack) -> BackendFlavour:
    backend = stack.backend.lower()
    if any(marker in backend for marker in _NODE_MARKERS):
        return "node"
    if any(marker in backend for marker in _PYTHON_MARKERS):
        return "python"
    return "generic"


def backend_port(stack: AppStack) -> int:
    return _BACKEND_PORTS[backend_flavour(stack)]


def is_nextjs(stack: AppStack) -> bool:
    return "next" in stack.frontend.lower()


def database_name(app_name: str) -> str:
    return "_".join(app_name.lower().split()) or "app"


def database_service(stack: AppStack, db_name: str) -> DatabaseService | None:
    """Describe the database container, or None when the stack has no database."""
    if not stack.has_database:
        return None

    database = stack.database.lower()
    if "postgres" in database or "supabase" in database:
        return DatabaseService(
            image="postgres:15",
            port=5432,
            volume="postgres_data",
            data_dir="/var/lib/postgresql/data",
            url_scheme="postgresql",
            environment={
                "POSTGRES_DB": db_name,
                "POSTGRES_USER": "postgres",
                "POSTGRES_PASSWORD": "postgres",
            },
        )
    if "mysql" in database or "maria" in database:
        return DatabaseService(
            image="mysql:8",
            port=3306,
            volume="mysql_data",
            data_dir="/var/lib/mysql",
            url_scheme="mysql",
            environment={
                "MYSQL_DATABASE": db_name,
                "MYSQL_USER": "app",
                "MYSQL_PASSWORD": "app",
                "MYSQL_ROOT_PASSWORD": "root",
            },
        )
    if "mongo" in database:
        return DatabaseService(
            image="mongo:7",
            port=27017,
            volume="mongo_data",
            data_dir="/data/db",
            url_scheme="mongodb",
            environment={"MONGO_INITDB_DATABASE": db_name},
        )
    # Unknown engine: best-effort image named after it
    name = _IMAGE_UNSAFE.sub("-", database).strip("-._") or "database"
    return DatabaseService(
        image=f"{name}:latest",
        port=5432,
        volume="database_data",
        data_dir="/data",
        url_scheme=name,
        environment={},
    )


def database_url(stack: AppStack, db_name: str, host: str = "localhost") -> str | None:
    service = database_service(stack, db_name)
    if service is None:
        return None
    if service.url_scheme == "postgresql":
        credentials = "postgres:postgres@"
    elif service.url_scheme == "mysql":
        credentials = "app:app@"
    else:
        credentials = ""
    return f"{service.url_scheme}://{credentials}{host}:{service.port}/{db_name}"
