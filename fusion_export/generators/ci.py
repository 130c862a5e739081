"""GitHub Actions workflows."""

import json

from fusion_export.generators.stack import backend_flavour, database_service
from fusion_export.models.project import GeneratedApp


def _expr(expression: str) -> str:
    """Render a GitHub Actions expression."""
    return "${{ " + expression + " }}"


def _echo_step(title: str, message: str) -> str:
    """Placeholder deploy step that echoes ``message`` from its environment."""
    return f"""      - name: {json.dumps(title)}
        run: echo "$DEPLOY_MESSAGE"
        env:
          DEPLOY_MESSAGE: {json.dumps(message)}
"""


_PLATFORM_STEPS: dict[str, str] = {
    "vercel": f"""      - name: Deploy to Vercel
        run: npx vercel deploy --prod --yes --token {_expr('secrets.VERCEL_TOKEN')}
        env:
          VERCEL_ORG_ID: {_expr('secrets.VERCEL_ORG_ID')}
          VERCEL_PROJECT_ID: {_expr('secrets.VERCEL_PROJECT_ID')}
""",
    "netlify": f"""      - name: Deploy to Netlify
        run: npx netlify-cli deploy --prod --dir=dist
        env:
          NETLIFY_AUTH_TOKEN: {_expr('secrets.NETLIFY_AUTH_TOKEN')}
          NETLIFY_SITE_ID: {_expr('secrets.NETLIFY_SITE_ID')}
""",
    "railway": f"""      - name: Deploy to Railway
        run: npx @railway/cli up --detach
        env:
          RAILWAY_TOKEN: {_expr('secrets.RAILWAY_TOKEN')}
""",
    "heroku": f"""      - name: Deploy to Heroku
        uses: akhileshns/heroku-deploy@v3.13.15
        with:
          heroku_api_key: {_expr('secrets.HEROKU_API_KEY')}
          heroku_app_name: {_expr('secrets.HEROKU_APP_NAME')}
          heroku_email: {_expr('secrets.HEROKU_EMAIL')}
""",
    "aws": f"""      - name: Configure AWS credentials
        uses: aws-actions/configure-aws-credentials@v4
        with:
          aws-access-key-id: {_expr('secrets.AWS_ACCESS_KEY_ID')}
          aws-secret-access-key: {_expr('secrets.AWS_SECRET_ACCESS_KEY')}
          aws-region: {_expr('secrets.AWS_REGION')}
      - name: Deploy to AWS
        run: aws s3 sync dist/ s3://{_expr('secrets.AWS_S3_BUCKET')} --delete
""",
    "azure": f"""      - name: Deploy to Azure Web App
        uses: azure/webapps-deploy@v3
        with:
          app-name: {_expr('secrets.AZURE_WEBAPP_NAME')}
          publish-profile: {_expr('secrets.AZURE_WEBAPP_PUBLISH_PROFILE')}
          package: .
""",
    "gcp": f"""      - name: Authenticate to Google Cloud
        uses: google-github-actions/auth@v2
        with:
          credentials_json: {_expr('secrets.GCP_CREDENTIALS')}
      - name: Deploy to Cloud Run
        uses: google-github-actions/deploy-cloudrun@v2
        with:
          service: {_expr('secrets.GCP_SERVICE_NAME')}
          source: .
""",
}


def generate_ci_workflow(app: GeneratedApp) -> str:
    """Generate .github/workflows/ci.yml: install, test and build on every push."""
    services = ""
    database = database_service(app.stack, "test_db")
    if database is not None:
        env_lines = "".join(
            f"          {key}: {value}\n" for key, value in database.environment.items()
        )
        services = f"""    services:
      database:
        image: {database.image}
        env:
{env_lines}        ports:
          - {database.port}:{database.port}
"""

    python_steps = ""
    if backend_flavour(app.stack) == "python":
        python_steps = """      - uses: actions/setup-python@v5
        with:
          python-version: "3.11"
      - name: Install backend dependencies
        working-directory: ./backend
        run: pip install -r requirements.txt
      - name: Run backend tests
        working-directory: ./backend
        run: pytest
"""

    return f"""name: CI

on:
  push:
    branches: [main]
  pull_request:
    branches: [main]

jobs:
  test:
    runs-on: ubuntu-latest
{services}    steps:
      - uses: actions/checkout@v4
      - uses: actions/setup-node@v4
        with:
          node-version: 18
          cache: npm
      - run: npm ci
      - run: npm test --if-present
      - run: npm run build
{python_steps}"""


def generate_deploy_workflow(app: GeneratedApp) -> str:
    """Generic deploy workflow targeting the stack's deployment platform."""
    target = app.stack.deployment
    steps = _PLATFORM_STEPS.get(
        target.lower(), _echo_step("Deploy", f"Deploying {app.name} to {target}")
    )
    return f"""name: Deploy

on:
  push:
    branches: [main]

jobs:
  deploy:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - uses: actions/setup-node@v4
        with:
          node-version: 18
      - run: npm ci
      - run: npm run build
{steps}"""


def generate_platform_deploy_workflow(app: GeneratedApp, platform: str) -> str:
    """Deploy workflow for one specific platform (deploy-<platform>.yml)."""
    steps = _PLATFORM_STEPS.get(
        platform, _echo_step(f"Deploy to {platform}", f"Deploying {app.name} to {platform}")
    )
    return f"""name: {json.dumps(f"Deploy to {platform}")}

on:
  push:
    branches: [main]
  workflow_dispatch:

jobs:
  deploy:
    runs-on: ubuntu-latest
    environment: production
    steps:
      - uses: actions/checkout@v4
      - uses: actions/setup-node@v4
        with:
          node-version: 18
      - run: npm ci
      - run: npm run build
{steps}"""
