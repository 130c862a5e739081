"""Delivery adapter interface."""

from abc import ABC, abstractmethod


class DeliveryAdapter(ABC):
    """Receives finished export blobs, one call per delivery unit."""

    @abstractmethod
    async def deliver(self, content: bytes, filename: str, media_type: str) -> None:
        """Persist or transmit one unit.

        Raises:
            DeliveryError: the unit could not be delivered
        """
