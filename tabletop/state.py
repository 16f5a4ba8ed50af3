"""Hanabi cards, deck and game state."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

MAX_HINT_TOKENS = 8
MAX_MISS_TOKENS = 3

_CARD_COUNTS = {1: 3, 2: 2, 3: 2, 4: 2, 5: 1}


class Color(str, Enum):
    """Firework colours."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    WHITE = "white"


@dataclass
class Card:
    """A single card, with what its holder has been told about it."""

    color: Color
    number: int
    color_known: bool = False
    number_known: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "color": Color(self.color).value,
            "number": self.number,
            "colorKnown": self.color_known,
            "numberKnown": self.number_known,
        }


@dataclass
class State:
    """The full state of one Hanabi game."""

    fireworks: dict[Color, int] = field(
        default_factory=lambda: {color: 0 for color in Color}
    )
    hint_tokens: int = MAX_HINT_TOKENS
    miss_tokens: int = MAX_MISS_TOKENS
    turn_index: int = 0
    deck: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)
    game_started: bool = False
    game_over: bool = False
    last_player: int = 0
    player_hands: dict[str, list[Card]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the public view of the state; the deck is left out."""
        return {
            "fireworks": {Color(c).value: n for c, n in self.fireworks.items()},
            "hintTokens": self.hint_tokens,
            "missTokens": self.miss_tokens,
            "turnIndex": self.turn_index,
            "discardPile": [card.to_dict() for card in self.discard_pile],
            "gameStarted": self.game_started,
            "gameOver": self.game_over,
            "lastPlayer": self.last_player,
            "playerHands": {
                player: [card.to_dict() for card in hand]
                for player, hand in self.player_hands.items()
            },
        }


def new_state(deck: list[Card]) -> State:
    """Return a fresh, unstarted state drawing from ``deck``."""
    return State(deck=deck)


def deal_initial_cards(
    players: list[str], deck: list[Card], hands: dict[str, list[Card]]
) -> None:
    """Deal opening hands from the front of ``deck`` into ``hands``.

    Five cards each, four when there are four or more players. Dealt cards are
    removed from ``deck``; each hand gets fresh copies with nothing known.
    """
    card_count = 4 if len(players) >= 4 else 5
    for player in players:
        dealt = deck[:card_count]
        del deck[:card_count]
        hands[player] = [Card(card.color, card.number) for card in dealt]


def generate_deck() -> list[Card]:
    """Return the 50-card Hanabi deck in random order."""
    deck = [
        Card(color, number)
        for color in Color
        for number, count in _CARD_COUNTS.items()
        for _ in range(count)
    ]
    random.shuffle(deck)
    return deck