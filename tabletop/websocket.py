"""Websocket endpoint that tracks connected users and dispatches their events."""

from __future__ import annotations

import json
import logging

from aiohttp import WSMsgType, web

from tabletop.applog import _real_ip
from tabletop.sessions import SessionRegistry, SocketEvent, UserSession

logger = logging.getLogger(__name__)


def handle_event(user: UserSession, event: SocketEvent) -> str:
    """Dispatch one event from ``user`` and return a description of it."""
    match event.type:
        case "create_room":
            message = f"creating room: {event.room_id} by {event.name}"
        case "join_room":
            message = f"joining room: {event.room_id} by {event.name}"
        case "start_game":
            message = f"start game in room: {event.room_id}"
        case _:
            message = f"unknown event type: {event.type}"
    logger.info("%s (session %s)", message, user.id)
    return message


def _peer_address(request: web.Request) -> str:
    transport = request.transport
    peer = transport.get_extra_info("peername") if transport else None
    if not peer:
        return ""
    host = f"[{peer[0]}]" if ":" in str(peer[0]) else peer[0]
    return f"{host}:{peer[1]}"


def register_websocket(app: web.Application, registry: SessionRegistry) -> None:
    """Serve websockets on ``/ws``, keeping ``registry`` in step with connections."""

    async def websocket_handler(request: web.Request) -> web.WebSocketResponse:
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        socket_id = _real_ip(request) + _peer_address(request)
        user = UserSession(id=socket_id, connection=ws)
        registry.register(user)
        logger.info("Connected: %s", socket_id)
        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
                if msg.type not in (WSMsgType.TEXT, WSMsgType.BINARY):
                    continue
                try:
                    event = SocketEvent.from_dict(json.loads(msg.data))
                except ValueError as exc:
                    logger.warning("invalid message format: %s", exc)
                    continue
                handle_event(user, event)
        finally:
            registry.unregister(socket_id)
            logger.info("Disconnected: %s", socket_id)
        return ws

    app.router.add_get("/ws", websocket_handler)