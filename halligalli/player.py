"""Players and their status."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from halligalli.card import CardDeck


class PlayerStatus(IntEnum):
    """What a player is doing; also used as the action code on the wire."""

    NULL = 0
    INIT = 1
    READY = 2
    START = 3
    GAMING = 4
    TURN = 5
    LOSE = 6
    WIN = 7
    DRAW = 8
    BELL = 9
    TURN_END = 10
    DENY = 11
    NOT_WANT = 12


@dataclass
class Player:
    """A player with a hand deck and the pile laid out on the table."""

    id: int
    status: PlayerStatus = PlayerStatus.NULL
    deck: CardDeck = field(default_factory=CardDeck)
    table: CardDeck = field(default_factory=CardDeck)

    def is_deck_empty(self) -> bool:
        """True when the player holds no cards in hand."""
        return len(self.deck) == 0