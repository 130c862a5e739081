"""Docker assets: Dockerfiles, compose files and helper scripts."""

import shlex
from typing import Any

import yaml

from fusion_export.generators.stack import (
    backend_flavour,
    backend_port,
    database_name,
    database_service,
    database_url,
    is_nextjs,
)
from fusion_export.models.project import AppStack, GeneratedApp

_NEXTJS_DOCKERFILE = """# Frontend Dockerfile for Next.js
FROM node:18-alpine AS base

# Install dependencies only when needed
FROM base AS deps
RUN apk add --no-cache libc6-compat
WORKDIR /app

COPY package.json yarn.lock* package-lock.json* pnpm-lock.yaml* ./
RUN \\
  if [ -f yarn.lock ]; then yarn --frozen-lockfile; \\
  elif [ -f package-lock.json ]; then npm ci; \\
  elif [ -f pnpm-lock.yaml ]; then yarn global add pnpm && pnpm i --frozen-lockfile; \\
  else echo "Lockfile not found." && exit 1; \\
  fi

# Rebuild the source code only when needed
FROM base AS builder
WORKDIR /app
COPY --from=deps /app/node_modules ./node_modules
COPY . .

ENV NEXT_TELEMETRY_DISABLED 1

RUN npm run build

# Production image, copy the standalone output and run next
FROM base AS runner
WORKDIR /app

ENV NODE_ENV production
ENV NEXT_TELEMETRY_DISABLED 1

RUN addgroup --system --gid 1001 nodejs
RUN adduser --system --uid 1001 nextjs

COPY --from=builder /app/public ./public

RUN mkdir .next
RUN chown nextjs:nodejs .next

COPY --from=builder --chown=nextjs:nodejs /app/.next/standalone ./
COPY --from=builder --chown=nextjs:nodejs /app/.next/static ./.next/static

USER nextjs

EXPOSE 3000

ENV PORT 3000
ENV HOSTNAME "0.0.0.0"

CMD ["node", "server.js"]
"""

_STATIC_DOCKERFILE = """# Frontend Dockerfile for {frontend}
FROM node:18-alpine AS builder

WORKDIR /app

COPY package*.json ./
RUN npm ci

COPY . .
RUN npm run build

# Production stage
FROM nginx:alpine

COPY --from=builder /app/dist /usr/share/nginx/html
COPY nginx.conf /etc/nginx/nginx.conf

EXPOSE 80

CMD ["nginx", "-g", "daemon off;"]
"""

_NODE_DOCKERFILE = """# Backend Dockerfile for Node.js
FROM node:18-alpine AS base

# Install dependencies only when needed
FROM base AS deps
RUN apk add --no-cache libc6-compat
WORKDIR /app

COPY package.json yarn.lock* package-lock.json* pnpm-lock.yaml* ./
RUN \\
  if [ -f yarn.lock ]; then yarn --frozen-lockfile; \\
  elif [ -f package-lock.json ]; then npm ci; \\
  elif [ -f pnpm-lock.yaml ]; then yarn global add pnpm && pnpm i --frozen-lockfile; \\
  else echo "Lockfile not found." && exit 1; \\
  fi

# Rebuild the source code only when needed
FROM base AS builder
WORKDIR /app
COPY --from=deps /app/node_modules ./node_modules
COPY . .

RUN npm run build

# Production image
FROM base AS runner
WORKDIR /app

ENV NODE_ENV production

RUN addgroup --system --gid 1001 nodejs
RUN adduser --system --uid 1001 nodejs

COPY --from=builder --chown=nodejs:nodejs /app/dist ./dist
COPY --from=builder --chown=nodejs:nodejs /app/node_modules ./node_modules
COPY --from=builder --chown=nodejs:nodejs /app/package.json ./package.json

USER nodejs

EXPOSE {port}

ENV PORT {port}

HEALTHCHECK --interval=30s --timeout=3s --start-period=5s --retries=3 \\
  CMD wget --no-verbose --tries=1 --spider http://localhost:{port}/health || exit 1

CMD ["node", "dist/app.js"]
"""

_PYTHON_DOCKERFILE = """# Backend Dockerfile for Python
FROM python:3.11-slim

WORKDIR /app

RUN apt-get update \\
    && apt-get install -y --no-install-recommends \\
        build-essential \\
        curl \\
    && rm -rf /var/lib/apt/lists/*

COPY requirements.txt .
RUN pip install --no-cache-dir -r requirements.txt

COPY . .

RUN adduser --disabled-password --gecos '' appuser
RUN chown -R appuser:appuser /app
USER appuser

EXPOSE {port}

HEALTHCHECK --interval=30s --timeout=3s --start-period=5s --retries=3 \\
  CMD curl -f http://localhost:{port}/health || exit 1

CMD ["uvicorn", "app:app", "--host", "0.0.0.0", "--port", "{port}"]
"""

_GENERIC_DOCKERFILE = """# Backend Dockerfile for {backend}
FROM alpine:latest

WORKDIR /app

RUN apk add --no-cache ca-certificates

COPY app .

EXPOSE {port}

HEALTHCHECK --interval=30s --timeout=3s --start-period=5s --retries=3 \\
  CMD wget --no-verbose --tries=1 --spider http://localhost:{port}/health || exit 1

CMD ["./app"]
"""

_NGINX_CONF = """worker_processes auto;
pid /run/nginx.pid;

events {
    worker_connections 1024;
}

http {
    include /etc/nginx/mime.types;
    default_type application/octet-stream;

    sendfile on;
    keepalive_timeout 65;

    gzip on;
    gzip_vary on;
    gzip_min_length 1000;
    gzip_types text/css text/javascript application/javascript application/json image/svg+xml;

    server {
        listen 80;
        server_name _;

        root /usr/share/nginx/html;
        index index.html;

        location ~* \\.(js|css|png|jpg|jpeg|gif|ico|svg|woff|woff2)$ {
            expires 1y;
            add_header Cache-Control "public, immutable";
        }

        location / {
            try_files $uri $uri/ /index.html;
        }

        location /api {
            proxy_pass http://backend:%(port)d;
            proxy_set_header Host $host;
            proxy_set_header X-Real-IP $remote_addr;
            proxy_set_header X-Forwarded-For $proxy_add_x_forwarded_for;
        }

        location /health {
            access_log off;
            return 200 "healthy\\n";
        }
    }
}
"""


def generate_backend_dockerfile(stack: AppStack) -> str:
    """Root Dockerfile for the backend service, by backend flavour."""
    flavour = backend_flavour(stack)
    port = backend_port(stack)
    if flavour == "node":
        return _NODE_DOCKERFILE.format(port=port)
    if flavour == "python":
        return _PYTHON_DOCKERFILE.format(port=port)
    return _GENERIC_DOCKERFILE.format(backend=stack.backend, port=port)


def generate_frontend_dockerfile(stack: AppStack) -> str:
    """Next.js gets a standalone build; everything else a static nginx image."""
    if is_nextjs(stack):
        return _NEXTJS_DOCKERFILE
    return _STATIC_DOCKERFILE.format(frontend=stack.frontend)


def generate_nginx_config(stack: AppStack) -> str:
    return _NGINX_CONF % {"port": backend_port(stack)}


def needs_nginx_config(stack: AppStack) -> bool:
    return not is_nextjs(stack)


def generate_dockerignore() -> str:
    return """node_modules
.git
.github
.vscode
.env
.env.local
dist
build
*.log
Dockerfile*
docker-compose*.yml
"""


def _compose_services(app: GeneratedApp, production: bool) -> dict[str, Any]:
    stack = app.stack
    port = backend_port(stack)
    frontend_port = 3000 if is_nextjs(stack) else 80
    db_name = database_name(app.name)
    database = database_service(stack, db_name)
    restart = "always" if production else "unless-stopped"

    backend_env = [
        f"NODE_ENV={'production' if production else 'development'}",
        f"PORT={port}",
    ]
    if database is not None:
        backend_env.append(f"DATABASE_URL={database_url(stack, db_name, host='database')}")

    backend: dict[str, Any] = {
        "build": {"context": ".", "dockerfile": "Dockerfile"},
        "environment": backend_env,
        "restart": restart,
        "healthcheck": {
            "test": ["CMD-SHELL", f"wget -q --spider http://localhost:{port}/health || exit 1"],
            "interval": "30s",
            "timeout": "10s",
            "retries": 3,
            "start_period": "40s",
        },
    }
    if production:
        backend["expose"] = [str(port)]
    else:
        backend["ports"] = [f"{port}:{port}"]
    if database is not None:
        backend["depends_on"] = ["database"]

    services: dict[str, Any] = {
        "frontend": {
            "build": {"context": "./frontend", "dockerfile": "Dockerfile"},
            "ports": [f"{'80' if production else '3000'}:{frontend_port}"],
            "environment": [f"API_URL=http://backend:{port}"],
            "depends_on": ["backend"],
            "restart": restart,
        },
        "backend": backend,
    }

    if database is not None:
        db_block: dict[str, Any] = {
            "image": database.image,
            "environment": dict(database.environment),
            "volumes": [f"{database.volume}:{database.data_dir}"],
            "restart": restart,
        }
        if not production:
            db_block["ports"] = [f"{database.port}:{database.port}"]
        services["database"] = db_block

    return services


def generate_docker_compose(app: GeneratedApp, production: bool = False) -> str:
    """Generate docker-compose.yml (or the production variant).

    A database service and its named volume are only present when the stack
    declares a database.
    """
    compose: dict[str, Any] = {"services": _compose_services(app, production)}
    database = database_service(app.stack, database_name(app.name))
    if database is not None:
        compose["volumes"] = {database.volume: {}}
    compose["networks"] = {"default": {"driver": "bridge"}}
    return yaml.safe_dump(compose, sort_keys=False, default_flow_style=False)


def generate_docker_setup_script(app: GeneratedApp) -> str:
    name = shlex.quote(app.name)
    return f"""#!/usr/bin/env bash
set -euo pipefail

echo "Setting up "{name}" with Docker..."
if [ ! -f .env ] && [ -f .env.example ]; then
  cp .env.example .env
fi
docker compose build
docker compose up -d
echo "Setup complete!"
"""


def generate_docker_deploy_script(app: GeneratedApp) -> str:
    name = shlex.quote(app.name)
    return f"""#!/usr/bin/env bash
set -euo pipefail

echo "Deploying "{name}"..."
docker compose -f docker-compose.prod.yml build
docker compose -f docker-compose.prod.yml up -d
echo "Deployment complete!"
"""
