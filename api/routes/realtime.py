"""
Live message notifications over WebSocket.

Clients connect to ``/ws/messages?token=<access token>`` and receive a
``message.created`` event whenever a message addressed to them is stored.
Anything the client sends is ignored; it only keeps the socket alive.
"""

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session
import anyio
import logging

from adapters import realtime_adapter
from api.dependencies import get_db
from app.exceptions import UnauthorizedError
from services.auth_service import AuthService

router = APIRouter(tags=["Realtime"])
logger = logging.getLogger("coachdesk.api.realtime")


async def _forward_events(websocket: WebSocket, subscription) -> None:
    while True:
        event = await subscription.queue.get()
        await websocket.send_json(event)


@router.websocket("/ws/messages")
async def message_feed(
    websocket: WebSocket,
    token: str = Query(""),
    db: Session = Depends(get_db),
):
    try:
        user = AuthService.authenticate(db, token)
    except UnauthorizedError as e:
        logger.warning(f"realtime_rejected reason={e.message}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    user_id = user.id
    db.close()

    await websocket.accept()
    subscription = realtime_adapter.subscribe(user_id)
    try:
        await websocket.send_json({"type": "ready", "user_id": str(user_id)})
        async with anyio.create_task_group() as tg:
            tg.start_soon(_forward_events, websocket, subscription)
            try:
                while True:
                    await websocket.receive_text()
            except WebSocketDisconnect:
                pass
            tg.cancel_scope.cancel()
    finally:
        realtime_adapter.unsubscribe(subscription)
