"""REST endpoints for rooms and their players."""

from __future__ import annotations

import json
from typing import Any

from aiohttp import web

from tabletop.rooms import Attender, GameMode, Room, RoomManager


def success(data: Any) -> dict[str, Any]:
    """Wrap ``data`` in the success envelope."""
    return {"status": "success", "data": data, "message": None}


def failure(message: str, status: int) -> tuple[int, dict[str, Any]]:
    """Return ``status`` with the error envelope carrying ``message``."""
    return status, {"status": "error", "data": None, "message": message}


def _reply(status: int, body: dict[str, Any]) -> web.Response:
    return web.json_response(body, status=status)


def _ok(data: Any) -> web.Response:
    return _reply(200, success(data))


def _fail(message: str, status: int) -> web.Response:
    return _reply(*failure(message, status))


async def _read_object(request: web.Request) -> dict[str, Any]:
    """Decode the request body as a JSON object; an empty body is ``{}``."""
    raw = await request.read()
    if not raw.strip():
        return {}
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("body must be a JSON object")
    return data


def _text_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _room_summary(room: Room) -> dict[str, Any]:
    return {
        "id": room.id,
        "gameMode": GameMode(room.game_mode).value,
        "playerCount": len(room.players),
        "createdAt": room.created_at.isoformat(),
    }


def _player_summary(player: Attender) -> dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "isHost": player.is_host,
        "ready": player.ready,
    }


def register_api(app: web.Application, manager: RoomManager) -> None:
    """Add the room API routes to ``app``, backed by ``manager``."""

    async def list_rooms(request: web.Request) -> web.Response:
        return _ok([_room_summary(room) for room in manager.list_rooms()])

    async def list_players(request: web.Request) -> web.Response:
        room = manager.get_room(request.match_info["roomId"])
        if room is None:
            return _fail("room not found", 404)
        return _ok([_player_summary(p) for p in room.players])

    async def create_room(request: web.Request) -> web.Response:
        try:
            body = await _read_object(request)
            room_id = _text_field(body, "roomId")
            host_name = _text_field(body, "hostName")
        except ValueError:
            return _fail("invalid request", 400)
        if not room_id or not host_name:
            return _fail("roomId and hostName are required", 400)

        existing = manager.get_room(room_id)
        if existing is not None and any(p.name == host_name for p in existing.players):
            return _fail("name already taken in this room", 409)

        host = Attender(f"{room_id}-host", host_name, is_host=True)
        room = manager.create_room(room_id, host, GameMode.HANABI, None)
        return _ok(
            {
                "roomId": room.id,
                "gameMode": room.game_mode.value,
                "createdAt": room.created_at.isoformat(),
                "host": host.name,
                "playerCount": len(room.players),
            }
        )

    async def delete_room(request: web.Request) -> web.Response:
        manager.delete_room(request.match_info["roomId"])
        return _ok("room deleted")

    async def mark_player_ready(request: web.Request) -> web.Response:
        room = manager.get_room(request.match_info["roomId"])
        if room is None:
            return _fail("room not found", 404)
        player_id = request.match_info["playerId"]
        for player in room.players:
            if player.id == player_id:
                player.ready = True
                break
        if all(p.ready for p in room.players) and room.engine is not None:
            room.engine.start_game()
        return _ok("player ready")

    async def remove_player(request: web.Request) -> web.Response:
        room = manager.get_room(request.match_info["roomId"])
        if room is None:
            return _fail("room not found", 404)
        player_id = request.match_info["playerId"]
        for index, player in enumerate(room.players):
            if player.id == player_id:
                del room.players[index]
                break
        return _ok("player removed")

    async def update_game_mode(request: web.Request) -> web.Response:
        room = manager.get_room(request.match_info["roomId"])
        if room is None:
            return _fail("room not found", 404)
        try:
            mode = _text_field(await _read_object(request), "gameMode")
        except ValueError:
            mode = ""
        if not mode:
            return _fail("invalid gameMode", 400)
        if mode == GameMode.HANABI.value:
            room.game_mode = GameMode.HANABI
            return _ok("game mode updated to hanabi")
        return _fail("unsupported game mode", 400)

    app.router.add_get("/api/rooms", list_rooms)
    app.router.add_get("/api/rooms/{roomId}/players", list_players)
    app.router.add_post("/api/rooms", create_room)
    app.router.add_delete("/api/rooms/{roomId}", delete_room)
    app.router.add_post("/api/rooms/{roomId}/players/{playerId}/ready", mark_player_ready)
    app.router.add_delete("/api/rooms/{roomId}/players/{playerId}", remove_player)
    app.router.add_post("/api/rooms/{roomId}/mode", update_game_mode)