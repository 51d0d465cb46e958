# halligalli

A small server for the card game Halli Galli. Players connect over TCP,
take turns turning cards face up onto their own pile on the table, and
ring the bell when some fruit appears exactly five times among the
visible cards.

## Installing

```
pip install .
```

## Running the server

```
halligalli-server
```

Options:

- `--host` – address to listen on (default `0.0.0.0`)
- `--port` – port to listen on (default `4848`)

The server accepts players one at a time. Each connecting player is sent
its status, seated, and then the server reads one action from it. A
player that sends `READY` is marked ready and told so; the lobby closes
when a player sends `NOT_WANT`. The server then sends the last seated
player its status, reads one more action from it, deals the 56-card deck
evenly among the players and tells the player whose turn it is. Each
player is then served on its own thread until its hand is empty or it
disconnects. When every player is done the game ends and the server
closes all connections and exits.

## Protocol

Every message the server sends is a JSON object padded with zero bytes to
a 128-byte frame; it reads up to 128 bytes per client message and ignores
anything after the first zero byte. A message that is not a JSON object,
or has no usable `player_action`, counts as action 0.

A client sends its action:

```json
{"player_action": 8}
```

Action numbers follow `halligalli.player.PlayerStatus`: `READY` (2) to
get ready, `DRAW` (8) to turn over a card, `BELL` (9) to ring the bell,
`TURN_END` (10) to pass the turn, and `NOT_WANT` (12) to stop accepting
more players. On a player's turn `DRAW`, `BELL` and `TURN_END` are
accepted; out of turn only `BELL` is.

The server answers with an action message:

```json
{ "player_id": 5, "player_turn": 5, "player_action": 5 }
```

or, after `DRAW` or `BELL`, with the table state:

```json
{ "player_turn": 5, "all_players_data": [ { "player_id": 5, "cardDeckOnTable_volume": 2, "cardDeckOnTable_type": 1 } ] }
```

`cardDeckOnTable_volume` is the fruit-count index of the front table card
(0 for one fruit up to 4 for five), `cardDeckOnTable_type` is a
`halligalli.card.CardType` value, and both are `null` for a player with
no card on the table. Players are identified by the server's descriptor
number for their connection. A player whose hand runs out is sent
`player_action` 6 (`LOSE`) and removed from the table.

## Using the library

The rules are available without any networking:

```python
import random

from halligalli.card import CardDeck
from halligalli.game import Game
from halligalli.player import Player

game = Game(CardDeck.full(random.Random(1)))
game.join(Player(0))
game.join(Player(1))
game.start()

first = game.find_player(game.player_turn)
game.put_card_on_table(first)
if game.is_valid_bell():
    game.ring_bell(first)
game.end_turn(first)
```

Calls that break the rules, such as acting before the game has started or
ending a turn that is not yours, raise `halligalli.game.GameError`.
`Game.ring_bell` returns whether the ring was valid: a valid ring takes
the top table card of every other player, an invalid one gives one card
from the ringer's hand to each other player.

`halligalli.serializer` builds and reads the JSON messages above with
`serialize_send_action`, `serialize_send_data` and
`deserialize_player_action`.

## What it does not do

There is no game client: players need their own program that speaks the
protocol above. The server runs a single game and keeps no record of it
afterwards.

## Tests

```
pip install ".[test]"
pytest
```