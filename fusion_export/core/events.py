"""Event system for Server-Sent Events (SSE)."""

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID


@dataclass
class Event:
    """An SSE event."""

    event_type: str
    data: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def payload(self) -> str:
        """JSON data line, timestamp included."""
        return json.dumps({**self.data, "timestamp": self.timestamp.isoformat()})


class EventBus:
    """Fan-out of bulk export job events, one queue per job."""

    def __init__(self):
        self._subscribers: dict[UUID, asyncio.Queue[Event]] = {}

    def subscribe(self, job_id: UUID) -> asyncio.Queue[Event]:
        """Subscribe to events for a job."""
        if job_id not in self._subscribers:
            self._subscribers[job_id] = asyncio.Queue()
        return self._subscribers[job_id]

    def unsubscribe(self, job_id: UUID) -> None:
        self._subscribers.pop(job_id, None)

    async def publish(self, job_id: UUID, event: Event) -> None:
        """Publish an event for a job."""
        if job_id in self._subscribers:
            await self._subscribers[job_id].put(event)

    async def publish_job_started(self, job_id: UUID, total_apps: int) -> None:
        await self.publish(
            job_id,
            Event(event_type="job_started", data={"total_apps": total_apps}),
        )

    async def publish_job_progress(
        self, job_id: UUID, app_name: str, progress: float, processed_size: int
    ) -> None:
        """Publish progress after one app finished exporting."""
        await self.publish(
            job_id,
            Event(
                event_type="job_progress",
                data={
                    "app": app_name,
                    "progress": progress,
                    "processed_size": processed_size,
                },
            ),
        )

    async def publish_item_failed(self, job_id: UUID, app_name: str, error: str) -> None:
        await self.publish(
            job_id,
            Event(
                event_type="job_item_failed",
                data={"app": app_name, "error": error},
            ),
        )

    async def publish_job_finished(
        self, job_id: UUID, status: str, exported: int, failed: int
    ) -> None:
        """Publish the terminal event of a job."""
        await self.publish(
            job_id,
            Event(
                event_type="job_completed",
                data={"status": status, "exported": exported, "failed": failed},
            ),
        )

    async def publish_error(self, job_id: UUID, error: str) -> None:
        await self.publish(
            job_id,
            Event(event_type="error", data={"error": error}),
        )


# Singleton instance
_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get the event bus singleton."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus
