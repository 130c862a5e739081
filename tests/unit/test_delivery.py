"""Unit tests for delivery adapters."""

from pathlib import Path

import pytest

from fusion_export.core.exceptions import DeliveryError
from fusion_export.delivery import FileSystemDelivery, MemoryDelivery


class TestFileSystemDelivery:
    """Tests for FileSystemDelivery."""

    @pytest.mark.asyncio
    async def test_writes_file(self, tmp_path: Path):
        delivery = FileSystemDelivery(tmp_path / "out")
        await delivery.deliver(b"data", "app-zip.zip", "application/zip")
        assert (tmp_path / "out" / "app-zip.zip").read_bytes() == b"data"

    @pytest.mark.asyncio
    async def test_strips_directories_from_name(self, tmp_path: Path):
        delivery = FileSystemDelivery(tmp_path)
        await delivery.deliver(b"x", "../../evil/name.txt", "text/plain")
        assert (tmp_path / "name.txt").read_bytes() == b"x"

    @pytest.mark.asyncio
    async def test_os_error_becomes_delivery_error(self, tmp_path: Path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way")
        delivery = FileSystemDelivery(blocker)

        with pytest.raises(DeliveryError) as exc_info:
            await delivery.deliver(b"x", "a.zip", "application/zip")
        assert exc_info.value.status_code == 502
        assert exc_info.value.details["filename"] == "a.zip"

    @pytest.mark.asyncio
    async def test_empty_name_rejected(self, tmp_path: Path):
        with pytest.raises(DeliveryError):
            await FileSystemDelivery(tmp_path).deliver(b"x", "dir/..", "text/plain")


class TestMemoryDelivery:
    """Tests for MemoryDelivery."""

    @pytest.mark.asyncio
    async def test_collects_in_order(self):
        delivery = MemoryDelivery()
        await delivery.deliver(b"a", "one", "text/plain")
        await delivery.deliver(b"bc", "two", "text/plain")
        assert delivery.filenames == ["one", "two"]
        assert delivery.total_bytes == 3
