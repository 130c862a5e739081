"""In-memory delivery, used by the HTTP API and bulk jobs."""

from fusion_export.delivery.base import DeliveryAdapter
from fusion_export.models.package import DeliveryUnit


class MemoryDelivery(DeliveryAdapter):
    def __init__(self) -> None:
        self.units: list[DeliveryUnit] = []

    async def deliver(self, content: bytes, filename: str, media_type: str) -> None:
        self.units.append(
            DeliveryUnit(filename=filename, content=content, media_type=media_type)
        )

    @property
    def filenames(self) -> list[str]:
        return [unit.filename for unit in self.units]

    @property
    def total_bytes(self) -> int:
        return sum(unit.size for unit in self.units)
