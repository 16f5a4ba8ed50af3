"""The Hanabi game engine and its events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from tabletop.state import (
    MAX_HINT_TOKENS,
    Card,
    State,
    deal_initial_cards,
    generate_deck,
    new_state,
)

logger = logging.getLogger(__name__)

BroadcastFunc = Callable[[list[str], Any], None]


class EventType(str, Enum):
    """Kinds of event a room may carry."""

    JOIN = "join"
    START_GAME = "start_game"
    PLAY_CARD = "play_card"
    GIVE_HINT = "give_hint"
    DISCARD = "discard"
    END_TURN = "end_turn"


class GameError(Exception):
    """Raised when an event cannot be applied to the game."""


@dataclass
class Event:
    """An event sent to the engine."""

    type: str
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        """Build an event from its JSON form ``{"type": ..., "data": {...}}``."""
        if not isinstance(data, dict):
            raise GameError("invalid event")
        event_type = data.get("type", "")
        payload = data.get("data") or {}
        if not isinstance(event_type, str) or not isinstance(payload, dict):
            raise GameError("invalid event")
        return cls(event_type, payload)


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return 0


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


class Engine:
    """Runs one Hanabi game and reports every change through ``broadcast``."""

    def __init__(
        self,
        players: list[str],
        broadcast: BroadcastFunc,
        set_game_state: Callable[[Any], None],
        get_players: Callable[[], list[str]] | None = None,
    ) -> None:
        self.players = players
        self.broadcast = broadcast
        self.set_game_state = set_game_state
        self.get_players = get_players
        self.current_state: State | None = None

    def start_game(self) -> None:
        """Shuffle a new deck, deal the hands and start the game."""
        logger.info("[Hanabi] StartGame")
        if not self.players:
            raise GameError("no players")
        state = new_state(generate_deck())
        deal_initial_cards(self.players, state.deck, state.player_hands)
        state.game_started = True
        state.turn_index = 0
        state.last_player = (len(self.players) + state.turn_index - 1) % len(self.players)

        self.current_state = state
        self.set_game_state(state)
        self.broadcast(self.players, state)

    def handle_event(self, event: Event) -> None:
        """Apply ``event`` to the running game; raise GameError if it cannot be."""
        if not isinstance(event, Event):
            raise GameError("invalid event")
        logger.info("[Hanabi] HandleEvent - Type: %s", event.type)
        try:
            kind = EventType(event.type)
        except ValueError:
            kind = None
        match kind:
            case EventType.GIVE_HINT:
                self._give_hint(event.data)
            case EventType.PLAY_CARD:
                self._play_card(event.data)
            case EventType.DISCARD:
                self._discard(event.data)
            case EventType.END_TURN:
                self._end_turn()
            case _:
                raise GameError(f"unknown event type: {event.type}")

    def _state(self) -> State:
        if self.current_state is None:
            raise GameError("game not started")
        return self.current_state

    def _give_hint(self, data: dict[str, Any]) -> None:
        state = self._state()
        hand = state.player_hands.get(_string(data, "toId"), [])
        hint_type = _string(data, "hintType")
        value = data.get("value")

        if hint_type == "color":
            if not isinstance(value, str):
                raise GameError("invalid color hint")
            for card in hand:
                if card.color == value:
                    card.color_known = True
        elif hint_type == "number":
            if not isinstance(value, (int, float)) or isinstance(value, bool):
                raise GameError("invalid number hint")
            for card in hand:
                if card.number == int(value):
                    card.number_known = True
        else:
            raise GameError("unknown hint type")

        if state.hint_tokens > 0:
            state.hint_tokens -= 1
        self.broadcast(self.players, state)

    def _take_card(self, state: State, data: dict[str, Any]) -> Card:
        player_id = _string(data, "playerId")
        index = int(_number(data, "cardIndex"))
        hand = state.player_hands.get(player_id, [])
        if not 0 <= index < len(hand):
            raise GameError("invalid card index")
        return hand.pop(index)

    def _play_card(self, data: dict[str, Any]) -> None:
        state = self._state()
        card = self._take_card(state, data)
        if state.fireworks.get(card.color, 0) + 1 == card.number:
            state.fireworks[card.color] = card.number
            if card.number == 5 and state.hint_tokens < MAX_HINT_TOKENS:
                state.hint_tokens += 1
        else:
            state.discard_pile.append(card)
            state.miss_tokens -= 1
            if state.miss_tokens <= 0:
                state.game_over = True
        self.broadcast(self.players, state)

    def _discard(self, data: dict[str, Any]) -> None:
        state = self._state()
        card = self._take_card(state, data)
        state.discard_pile.append(card)
        if state.hint_tokens < MAX_HINT_TOKENS:
            state.hint_tokens += 1
        self.broadcast(self.players, state)

    def _end_turn(self) -> None:
        state = self._state()
        count = len(self.players)
        state.turn_index = (state.turn_index + 1) % count
        if not state.deck and state.turn_index == (state.last_player + 1) % count:
            state.game_over = True
        self.broadcast(self.players, state)