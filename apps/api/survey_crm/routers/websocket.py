"""
WebSocket router for real-time survey notifications.

Clients connect to /ws/surveys and receive survey_created, survey_updated,
survey_deleted and survey_detail_added events as they happen. Events are
invalidation signals only: clients re-fetch through the REST API.
"""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from survey_crm.core.websocket import ConnectionManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ws", tags=["WebSocket"])


@router.websocket("/surveys")
async def websocket_surveys(websocket: WebSocket):
    """
    WebSocket endpoint for survey change notifications.

    No handshake payload is exchanged. A client may send "ping" to get
    "pong" back as a heartbeat; anything else is ignored.
    """
    manager: ConnectionManager = websocket.app.state.ws_manager
    await manager.connect(websocket)
    client = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "unknown"
    logger.info(
        "Client connected: %s (%d active)", client, manager.get_total_connections()
    )

    try:
        while True:
            try:
                data = await websocket.receive_text()

                if data == "ping":
                    await websocket.send_text("pong")
            except WebSocketDisconnect:
                break
    finally:
        await manager.disconnect(websocket)
        logger.info(
            "Client disconnected: %s (%d active)",
            client,
            manager.get_total_connections(),
        )
