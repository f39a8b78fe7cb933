"""Survey domain events (real-time broadcast dispatch).

Routers call these after a mutation has been committed. Each helper
schedules the broadcast as a background task so the HTTP response never
waits on, or fails because of, connected clients.
"""

from __future__ import annotations

import logging
from enum import Enum
from uuid import UUID

from fastapi import BackgroundTasks

from survey_crm.core.websocket import ConnectionManager

logger = logging.getLogger(__name__)


class SurveyEvent(str, Enum):
    """Event names pushed to dashboard clients."""

    CREATED = "survey_created"
    UPDATED = "survey_updated"
    DELETED = "survey_deleted"
    DETAIL_ADDED = "survey_detail_added"


def build_event(event: SurveyEvent, entity_id: UUID, message: str, **extra) -> dict:
    """Build the wire envelope: {"type": <event>, "data": {"id", "message", ...}}."""
    data = {"id": str(entity_id), "message": message}
    for key, value in extra.items():
        data[key] = str(value) if isinstance(value, UUID) else value
    return {"type": event.value, "data": data}


async def publish(manager: ConnectionManager, message: dict) -> None:
    """Broadcast to connected clients; delivery problems are never raised."""
    try:
        delivered = await manager.broadcast(message)
    except Exception:
        logger.warning("Failed to broadcast %s", message.get("type"), exc_info=True)
        return
    logger.debug("Broadcast %s to %d client(s)", message["type"], delivered)


def _schedule(
    background_tasks: BackgroundTasks, manager: ConnectionManager, message: dict
) -> None:
    background_tasks.add_task(publish, manager, message)


def notify_survey_created(
    background_tasks: BackgroundTasks, manager: ConnectionManager, survey_id: UUID
) -> None:
    _schedule(
        background_tasks,
        manager,
        build_event(SurveyEvent.CREATED, survey_id, "New survey created"),
    )


def notify_survey_updated(
    background_tasks: BackgroundTasks, manager: ConnectionManager, survey_id: UUID
) -> None:
    _schedule(
        background_tasks,
        manager,
        build_event(SurveyEvent.UPDATED, survey_id, "Survey updated"),
    )


def notify_survey_deleted(
    background_tasks: BackgroundTasks, manager: ConnectionManager, survey_id: UUID
) -> None:
    _schedule(
        background_tasks,
        manager,
        build_event(SurveyEvent.DELETED, survey_id, "Survey deleted"),
    )


def notify_survey_detail_added(
    background_tasks: BackgroundTasks,
    manager: ConnectionManager,
    survey_id: UUID,
    detail_id: UUID,
) -> None:
    """The event id is the new detail's id; survey_id names its owner."""
    _schedule(
        background_tasks,
        manager,
        build_event(
            SurveyEvent.DETAIL_ADDED,
            detail_id,
            "Survey detail added",
            survey_id=survey_id,
        ),
    )
