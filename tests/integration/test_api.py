"""Integration tests for API endpoints."""

import io
import json
import zipfile
from urllib.parse import quote

import pytest
from httpx import AsyncClient


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    @pytest.mark.asyncio
    async def test_health_check(self, client: AsyncClient):
        """Test health check returns healthy status."""
        response = await client.get("/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "environment" in data
        assert "timestamp" in data
        assert data["formats"] == 11
        assert data["jobs"] == 0


class TestExportEndpoints:
    """Tests for single-app export endpoints."""

    @pytest.mark.asyncio
    async def test_list_formats(self, client: AsyncClient):
        response = await client.get("/v1/exports/formats")

        assert response.status_code == 200
        formats = response.json()
        assert len(formats) == 11
        assert formats[0]["format"] == "zip"
        assert formats[0]["recommended"] is True

    @pytest.mark.asyncio
    async def test_estimate(self, client: AsyncClient, sample_app_payload: dict):
        response = await client.post(
            "/v1/exports/estimate",
            json={"app": sample_app_payload, "options": {"format": "json"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["format"] == "json"
        assert data["estimatedSize"] > 0

    @pytest.mark.asyncio
    async def test_resolve_preview(self, client: AsyncClient, sample_app_payload: dict):
        response = await client.post(
            "/v1/exports/resolve",
            json={"app": sample_app_payload, "options": {"includeDockerFiles": True}},
        )

        assert response.status_code == 200
        data = response.json()
        paths = [f["path"] for f in data["files"]]
        assert "Dockerfile" in paths
        assert data["metadata"]["totalFiles"] == len(paths)
        origins = {f["path"]: f["origin"] for f in data["files"]}
        assert origins["frontend/src/App.tsx"] == "app"
        assert origins["package.json"] == "synthetic"

    @pytest.mark.asyncio
    async def test_export_zip(self, client: AsyncClient, sample_app_payload: dict):
        response = await client.post("/v1/exports", json={"app": sample_app_payload})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert 'filename="my-cool-app-zip.zip"' in response.headers["content-disposition"]
        names = zipfile.ZipFile(io.BytesIO(response.content)).namelist()
        assert "frontend/src/App.tsx" in names

    @pytest.mark.asyncio
    async def test_export_non_ascii_filename(
        self, client: AsyncClient, sample_app_payload: dict
    ):
        app = {**sample_app_payload, "name": "我的应用"}
        response = await client.post("/v1/exports", json={"app": app})

        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert 'filename="____-zip.zip"' in disposition
        assert "filename*=UTF-8''" + quote("我的应用-zip.zip") in disposition

    @pytest.mark.asyncio
    async def test_export_custom_name_with_quote(
        self, client: AsyncClient, sample_app_payload: dict
    ):
        response = await client.post(
            "/v1/exports",
            json={"app": sample_app_payload, "options": {"customName": 'my "app".zip'}},
        )

        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="my _app_.zip"; ')
        assert disposition.endswith("filename*=UTF-8''my%20%22app%22.zip")

    @pytest.mark.asyncio
    async def test_export_individual(self, client: AsyncClient, sample_app_payload: dict):
        response = await client.post(
            "/v1/exports",
            json={"app": sample_app_payload, "options": {"format": "individual"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["format"] == "individual"
        filenames = [unit["filename"] for unit in data["units"]]
        assert filenames[-1] == "_flashfusion-metadata.json"
        assert "backend_src_server.ts" in filenames

    @pytest.mark.asyncio
    async def test_unsupported_format(self, client: AsyncClient, sample_app_payload: dict):
        response = await client.post(
            "/v1/exports",
            json={"app": sample_app_payload, "options": {"format": "rar"}},
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "UNSUPPORTEDFORMATERROR"
        assert error["details"]["format"] == "rar"

    @pytest.mark.asyncio
    async def test_duplicate_paths(self, client: AsyncClient):
        app = {
            "name": "dup",
            "files": [
                {"path": "a.ts", "content": "1"},
                {"path": "a.ts", "content": "2"},
            ],
        }
        response = await client.post("/v1/exports", json={"app": app})

        assert response.status_code == 422
        assert response.json()["error"]["details"]["path"] == "a.ts"

    @pytest.mark.asyncio
    async def test_metadata_path_rejected(self, client: AsyncClient):
        app = {
            "name": "sneaky",
            "files": [{"path": "_flashfusion-metadata.json", "content": "{}"}],
        }
        response = await client.post("/v1/exports", json={"app": app})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "DUPLICATEPATHERROR"

    @pytest.mark.asyncio
    async def test_invalid_app(self, client: AsyncClient):
        response = await client.post("/v1/exports", json={"app": {"name": ""}})
        assert response.status_code == 422


class TestJobEndpoints:
    """Tests for bulk export job endpoints."""

    @pytest.mark.asyncio
    async def test_job_lifecycle(self, client: AsyncClient, sample_app_payload: dict):
        response = await client.post(
            "/v1/exports/jobs",
            json={"name": "Release", "apps": [sample_app_payload]},
        )
        assert response.status_code == 202
        job_id = response.json()["id"]

        # The background task has run by the time the transport returns
        response = await client.get(f"/v1/exports/jobs/{job_id}")
        assert response.status_code == 200
        job = response.json()
        assert job["status"] == "completed"
        assert job["exportedCount"] == 1
        assert job["resultFilename"] == "release.zip"

        response = await client.get("/v1/exports/jobs")
        assert response.json()["total"] == 1

        response = await client.get(f"/v1/exports/jobs/{job_id}/download")
        assert response.status_code == 200
        assert 'filename="release.zip"' in response.headers["content-disposition"]
        names = zipfile.ZipFile(io.BytesIO(response.content)).namelist()
        assert names == ["my-cool-app/my-cool-app-zip.zip"]

        response = await client.delete(f"/v1/exports/jobs/{job_id}")
        assert response.status_code == 204

        response = await client.get(f"/v1/exports/jobs/{job_id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_cancel_completed_job_conflicts(
        self, client: AsyncClient, sample_app_payload: dict
    ):
        response = await client.post("/v1/exports/jobs", json={"apps": [sample_app_payload]})
        job_id = response.json()["id"]

        response = await client.post(f"/v1/exports/jobs/{job_id}/cancel")
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "JOBSTATEERROR"

    @pytest.mark.asyncio
    async def test_job_requires_apps(self, client: AsyncClient):
        response = await client.post("/v1/exports/jobs", json={"apps": []})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_job(self, client: AsyncClient):
        response = await client.get("/v1/exports/jobs/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_stream_finished_job(self, client: AsyncClient, sample_app_payload: dict):
        response = await client.post("/v1/exports/jobs", json={"apps": [sample_app_payload]})
        job_id = response.json()["id"]

        response = await client.get(f"/v1/exports/jobs/{job_id}/stream")
        assert response.status_code == 200
        assert "event: connected" in response.text
        data_line = next(line for line in response.text.splitlines() if line.startswith("data:"))
        assert json.loads(data_line[len("data:"):])["status"] == "completed"
