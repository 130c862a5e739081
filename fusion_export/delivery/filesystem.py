"""Write export artifacts to a local directory."""

import asyncio
from pathlib import Path, PurePosixPath

from fusion_export.config import settings
from fusion_export.core.exceptions import DeliveryError
from fusion_export.delivery.base import DeliveryAdapter
from fusion_export.utils.logging import get_logger

logger = get_logger(__name__)


class FileSystemDelivery(DeliveryAdapter):
    """Stores each unit as a file under ``output_dir``.

    ``output_dir`` defaults to ``settings.export_output_dir``. Only the last
    component of the suggested filename is used; units never land outside
    the output directory.
    """

    def __init__(self, output_dir: str | Path | None = None):
        self.output_dir = Path(output_dir or settings.export_output_dir)

    def target_for(self, filename: str) -> Path:
        name = PurePosixPath(filename.replace("\\", "/")).name
        if not name or name in (".", ".."):
            raise DeliveryError(filename, "empty filename")
        return self.output_dir / name

    async def deliver(self, content: bytes, filename: str, media_type: str) -> None:
        target = self.target_for(filename)
        try:
            await asyncio.to_thread(self._write, target, content)
        except OSError as e:
            raise DeliveryError(filename, str(e)) from e
        logger.info(
            "export.delivered",
            filename=target.name,
            path=str(target),
            size=len(content),
            media_type=media_type,
        )

    @staticmethod
    def _write(target: Path, content: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
