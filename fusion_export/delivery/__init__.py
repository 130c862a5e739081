"""Delivery adapters."""

from fusion_export.delivery.base import DeliveryAdapter
from fusion_export.delivery.filesystem import FileSystemDelivery
from fusion_export.delivery.memory import MemoryDelivery

__all__ = ["DeliveryAdapter", "FileSystemDelivery", "MemoryDelivery"]
