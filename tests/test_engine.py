import pytest

from tabletop.engine import Engine, Event, EventType, GameError
from tabletop.state import Card, Color, new_state


class Recorder:
    def __init__(self):
        self.broadcasts = []
        self.states = []

    def broadcast(self, players, state):
        self.broadcasts.append((list(players), state))

    def set_state(self, state):
        self.states.append(state)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def engine(recorder):
    eng = Engine(["a", "b", "c"], recorder.broadcast, recorder.set_state)
    state = new_state([Card(Color.RED, 2)])
    state.game_started = True
    state.last_player = 2
    state.player_hands = {
        "a": [Card(Color.RED, 1), Card(Color.BLUE, 1), Card(Color.RED, 3)],
        "b": [Card(Color.GREEN, 5), Card(Color.RED, 2)],
        "c": [],
    }
    eng.current_state = state
    return eng


def test_start_game(recorder):
    eng = Engine(["a", "b", "c"], recorder.broadcast, recorder.set_state)
    eng.start_game()
    state = eng.current_state
    assert state.game_started
    assert state.turn_index == 0
    assert state.last_player == 2
    assert {p: len(h) for p, h in state.player_hands.items()} == {"a": 5, "b": 5, "c": 5}
    assert len(state.deck) == 35
    assert recorder.states == [state]
    assert recorder.broadcasts == [(["a", "b", "c"], state)]


def test_start_game_four_players_deals_four(recorder):
    eng = Engine(["a", "b", "c", "d"], recorder.broadcast, recorder.set_state)
    eng.start_game()
    assert all(len(h) == 4 for h in eng.current_state.player_hands.values())
    assert eng.current_state.last_player == 3


def test_start_game_without_players(recorder):
    eng = Engine([], recorder.broadcast, recorder.set_state)
    with pytest.raises(GameError):
        eng.start_game()


def test_color_hint_marks_matching_cards(engine, recorder):
    engine.handle_event(Event("give_hint", {"toId": "a", "hintType": "color", "value": "red"}))
    hand = engine.current_state.player_hands["a"]
    assert [c.color_known for c in hand] == [True, False, True]
    assert not any(c.number_known for c in hand)
    assert engine.current_state.hint_tokens == 7
    assert len(recorder.broadcasts) == 1


def test_number_hint_accepts_float(engine):
    engine.handle_event(Event("give_hint", {"toId": "a", "hintType": "number", "value": 1.0}))
    hand = engine.current_state.player_hands["a"]
    assert [c.number_known for c in hand] == [True, True, False]


def test_hint_tokens_do_not_go_negative(engine):
    engine.current_state.hint_tokens = 0
    engine.handle_event(Event("give_hint", {"toId": "b", "hintType": "number", "value": 5}))
    assert engine.current_state.hint_tokens == 0
    assert engine.current_state.player_hands["b"][0].number_known


@pytest.mark.parametrize(
    "data, message",
    [
        ({"toId": "a", "hintType": "color", "value": 3}, "invalid color hint"),
        ({"toId": "a", "hintType": "number", "value": "red"}, "invalid number hint"),
        ({"toId": "a", "hintType": "shape", "value": "x"}, "unknown hint type"),
    ],
)
def test_bad_hints(engine, data, message):
    with pytest.raises(GameError, match=message):
        engine.handle_event(Event("give_hint", data))
    assert engine.current_state.hint_tokens == 8


def test_play_card_success(engine):
    engine.handle_event(Event("play_card", {"playerId": "a", "cardIndex": 0}))
    state = engine.current_state
    assert state.fireworks[Color.RED] == 1
    assert [(c.color, c.number) for c in state.player_hands["a"]] == [
        (Color.BLUE, 1),
        (Color.RED, 3),
    ]
    assert state.miss_tokens == 3
    assert state.discard_pile == []


def test_play_five_restores_hint(engine):
    state = engine.current_state
    state.fireworks[Color.GREEN] = 4
    state.hint_tokens = 7
    engine.handle_event(Event("play_card", {"playerId": "b", "cardIndex": 0}))
    assert state.fireworks[Color.GREEN] == 5
    assert state.hint_tokens == 8


def test_play_card_miss(engine):
    engine.handle_event(Event("play_card", {"playerId": "a", "cardIndex": 2}))
    state = engine.current_state
    assert state.miss_tokens == 2
    assert [(c.color, c.number) for c in state.discard_pile] == [(Color.RED, 3)]
    assert state.fireworks[Color.RED] == 0
    assert not state.game_over


def test_last_miss_ends_game(engine):
    engine.current_state.miss_tokens = 1
    engine.handle_event(Event("play_card", {"playerId": "b", "cardIndex": 1}))
    assert engine.current_state.miss_tokens == 0
    assert engine.current_state.game_over


@pytest.mark.parametrize("event_type", ["play_card", "discard"])
@pytest.mark.parametrize("data", [{"playerId": "c", "cardIndex": 0}, {"playerId": "a", "cardIndex": 3}, {"playerId": "zz"}])
def test_invalid_card_index(engine, event_type, data):
    with pytest.raises(GameError, match="invalid card index"):
        engine.handle_event(Event(event_type, data))


def test_discard_restores_hint_up_to_limit(engine):
    state = engine.current_state
    state.hint_tokens = 7
    engine.handle_event(Event("discard", {"playerId": "a", "cardIndex": 1}))
    assert state.hint_tokens == 8
    assert [(c.color, c.number) for c in state.discard_pile] == [(Color.BLUE, 1)]
    assert len(state.player_hands["a"]) == 2
    engine.handle_event(Event("discard", {"playerId": "a", "cardIndex": 0}))
    assert state.hint_tokens == 8
    assert len(state.discard_pile) == 2


def test_end_turn_wraps(engine):
    state = engine.current_state
    state.turn_index = 2
    engine.handle_event(Event("end_turn"))
    assert state.turn_index == 0
    assert not state.game_over


def test_end_turn_game_over_when_deck_empty(engine):
    state = engine.current_state
    state.deck.clear()
    state.turn_index = 2
    engine.handle_event(Event("end_turn"))
    assert state.turn_index == 0
    assert state.game_over


@pytest.mark.parametrize("event_type", ["join", "start_game", "dance"])
def test_unknown_event_type(engine, event_type):
    with pytest.raises(GameError, match=f"unknown event type: {event_type}"):
        engine.handle_event(Event(event_type))


def test_non_event_rejected(engine):
    with pytest.raises(GameError, match="invalid event"):
        engine.handle_event({"type": "end_turn"})


def test_event_before_start(recorder):
    eng = Engine(["a"], recorder.broadcast, recorder.set_state)
    with pytest.raises(GameError, match="game not started"):
        eng.handle_event(Event("end_turn"))


def test_event_from_dict():
    event = Event.from_dict({"type": "play_card", "data": {"playerId": "a", "cardIndex": 1}})
    assert event == Event("play_card", {"playerId": "a", "cardIndex": 1})
    assert event.type == EventType.PLAY_CARD


def test_event_from_dict_missing_data():
    assert Event.from_dict({"type": "end_turn"}) == Event("end_turn", {})


@pytest.mark.parametrize("raw", [{"type": 5}, {"type": "x", "data": [1]}, "end_turn"])
def test_event_from_dict_invalid(raw):
    with pytest.raises(GameError):
        Event.from_dict(raw)