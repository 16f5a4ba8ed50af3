"""Game rooms, their players and the manager that holds them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol

from tabletop.sessions import UserSession


class GameMode(str, Enum):
    """Games a room can host."""

    HANABI = "hanabi"


@dataclass
class Attender:
    """A player seated in a room."""

    id: str
    name: str
    is_host: bool = False
    ready: bool = False


class GameEngine(Protocol):
    """What a room needs from the engine running its game."""

    def start_game(self) -> None:
        """Start a new game."""

    def handle_event(self, event: Any) -> None:
        """Apply one game event; raise if it cannot be applied."""


@dataclass
class Room:
    """A room with its players and its game."""

    id: str
    host: Attender
    players: list[Attender] = field(default_factory=list)
    game_mode: GameMode = GameMode.HANABI
    engine: GameEngine | None = None
    state: Any = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class RoomManager:
    """Rooms keyed by room id."""

    def __init__(self) -> None:
        self._rooms: dict[str, Room] = {}

    def create_room(
        self,
        room_id: str,
        host: Attender,
        game_mode: GameMode = GameMode.HANABI,
        engine: GameEngine | None = None,
    ) -> Room:
        """Create a room with ``host`` as its only player, replacing any with that id."""
        room = Room(room_id, host, [host], game_mode, engine)
        self._rooms[room_id] = room
        return room

    def create_room_for_user(self, room_id: str, user: UserSession) -> Room:
        """Create a room hosted by a connected user."""
        return self.create_room(room_id, Attender(user.id, user.name, is_host=True))

    def join_room(self, room_id: str, user: UserSession) -> Room | None:
        """Seat ``user`` in the room; return None if there is no such room."""
        room = self._rooms.get(room_id)
        if room is not None:
            room.players.append(Attender(user.id, user.name))
        return room

    def get_room(self, room_id: str) -> Room | None:
        return self._rooms.get(room_id)

    def list_rooms(self) -> list[Room]:
        return list(self._rooms.values())

    def delete_room(self, room_id: str) -> None:
        self._rooms.pop(room_id, None)