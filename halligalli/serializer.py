"""JSON messages exchanged between the game server and its players."""

from __future__ import annotations

import json
import re
from enum import IntEnum
from typing import Any

from halligalli.game import Game


class SendAction(IntEnum):
    """Notices the server may send about the table as a whole."""

    NOTHING = 0
    ALL_PLAYERS_NOT_READY = 1
    PLAYER_NOT_READY = 2


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _to_json(value: Any) -> str:
    """Render ``value`` in the spaced layout clients expect: ``{ "k": v }``."""
    if isinstance(value, dict):
        if not value:
            return "{ }"
        members = ", ".join(f"{json.dumps(key)}: {_to_json(item)}" for key, item in value.items())
        return "{ " + members + " }"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[ ]"
        return "[ " + ", ".join(_to_json(item) for item in value) + " ]"
    return json.dumps(value)


def _as_int(value: Any) -> int:
    """Read a JSON value as an integer the lenient way; anything unusable is 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def _encode(document: dict[str, Any], size: int) -> bytes:
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    return _to_json(document).encode("utf-8")[:size]


def deserialize_player_action(data: bytes | bytearray | str) -> int:
    """Return the ``player_action`` code of a received message.

    Everything after the first NUL is ignored. A message that is not a JSON
    object, or that has no usable ``player_action``, yields 0.
    """
    if isinstance(data, (bytes, bytearray)):
        text = bytes(data).split(b"\0", 1)[0].decode("utf-8", errors="replace")
    else:
        text = data.split("\0", 1)[0]
    try:
        document = json.loads(text)
    except ValueError:
        return 0
    if not isinstance(document, dict):
        return 0
    return _as_int(document.get("player_action"))


def serialize_send_data(game: Game, size: int) -> bytes:
    """Describe whose turn it is and every player's front table card.

    The result is cut to at most ``size`` bytes. A player with no card on
    the table is reported with null volume and type.
    """
    players = []
    for player in game.players:
        if len(player.table):
            card = player.table.front()
            volume: int | None = int(card.volume)
            card_type: int | None = int(card.type)
        else:
            volume = card_type = None
        players.append(
            {
                "player_id": player.id,
                "cardDeckOnTable_volume": volume,
                "cardDeckOnTable_type": card_type,
            }
        )
    document = {"player_turn": game.player_turn, "all_players_data": players}
    return _encode(document, size)


def serialize_send_action(
    player_id: int, player_turn: int, player_action: int, size: int
) -> bytes:
    """Build an action message for one player, cut to at most ``size`` bytes."""
    document = {
        "player_id": int(player_id),
        "player_turn": int(player_turn),
        "player_action": int(player_action),
    }
    return _encode(document, size)