# tabletop

`tabletop` is a small server for hosting rooms of the cooperative card game
Hanabi, together with the Hanabi rules engine. It offers a JSON HTTP API for
managing rooms and players, a health check, and a WebSocket endpoint that can
be mounted on the application. It is built on `aiohttp`.

## Installation

```
pip install .
```

To run the tests, install the test extra:

```
pip install ".[test]"
pytest
```

## Running the server

```
tabletop
```

Options:

- `--host` – address to bind (default: all interfaces)
- `--port` – port to listen on (default: 8080)
- `--log-dir` – directory in which the `hanabi_log` folder is kept (default: `.`)

On start the command prints `start board game`, creates
`<log-dir>/hanabi_log/server.log` and `<log-dir>/hanabi_log/access.log` if
they are missing, sends the package's logging to `server.log` and writes one
JSON line per request to `access.log` (transaction id, status, error, remote
address, time, latency, bytes in and out, method and path).

The application answers CORS requests from any origin and turns unhandled
errors into a `500` JSON response.

## HTTP API

Every response from the room API has the same envelope:

```json
{"status": "success", "data": ..., "message": null}
```

Errors use `"status": "error"`, with `"data": null` and a message, and come
with a matching HTTP status code (400, 404 or 409).

| Method | Path | Purpose |
| ------ | ---- | ------- |
| GET    | `/api/rooms` | List rooms with id, game mode, player count and creation time |
| POST   | `/api/rooms` | Create a room; body `{"roomId": "...", "hostName": "..."}` |
| DELETE | `/api/rooms/{roomId}` | Delete a room |
| GET    | `/api/rooms/{roomId}/players` | List players in a room |
| POST   | `/api/rooms/{roomId}/players/{playerId}/ready` | Mark a player ready |
| DELETE | `/api/rooms/{roomId}/players/{playerId}` | Remove a player |
| POST   | `/api/rooms/{roomId}/mode` | Set the game mode; body `{"gameMode": "hanabi"}` |
| GET    | `/hanabi/healthCheck` | Echoes the request headers and the body's `data` field |

Creating a room with a `roomId` that already exists replaces that room, unless
the existing room already has a player with the same name (`409`). The host
gets the player id `<roomId>-host`.

## Using the pieces directly

The game rules live in `tabletop.engine.Engine` and `tabletop.state`:

```python
from tabletop.engine import Engine, Event

states = []
engine = Engine(
    players=["p1", "p2"],
    broadcast=lambda player_ids, state: states.append(state),
    set_game_state=lambda state: None,
)
engine.start_game()
engine.handle_event(Event.from_dict({"type": "discard", "data": {"playerId": "p1", "cardIndex": 0}}))
print(engine.current_state.hint_tokens)
```

`handle_event` accepts `give_hint`, `play_card`, `discard` and `end_turn`
events and raises `tabletop.engine.GameError` for anything it cannot apply.
`State.to_dict()` gives the public view of a game, without the deck.

`tabletop.app.create_app(manager=None, access_log=None)` returns an
`aiohttp.web.Application` with the room API and health check, for embedding
or testing. `tabletop.rooms.RoomManager` holds the rooms, and
`tabletop.sessions.SessionRegistry` holds connected WebSocket users.

## WebSocket

`tabletop.websocket.register_websocket(app, registry)` adds a `/ws` endpoint
to an application. Each connection is registered in the `SessionRegistry`
while it is open. Messages are JSON objects of the form:

```json
{"type": "create_room", "roomId": "table-1", "name": "alice", "data": {}}
```

```python
from tabletop.app import create_app
from tabletop.sessions import SessionRegistry
from tabletop.websocket import register_websocket

app = create_app()
register_websocket(app, SessionRegistry())
```

## What it does not do

- The `tabletop` command does not serve `/ws`; the endpoint has to be added
  with `register_websocket` as shown above.
- WebSocket events (`create_room`, `join_room`, `start_game`) are only
  recognised and logged; they do not create or join rooms or start games, and
  nothing is sent back to the client.
- Rooms created through the HTTP API have no game engine attached, so marking
  every player ready does not start a game there. A game starts on "all ready"
  only for rooms created with an engine through `RoomManager.create_room`.
- Game state is not pushed to players by the server; the engine hands it to the
  `broadcast` callable it was given.
- Rooms and sessions are kept in memory only.