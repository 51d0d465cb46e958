"""Fruit cards and card decks."""

from __future__ import annotations

import random
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import IntEnum

MAX_CARD_NUM = 56
MAX_CARD_TYPE = 4
MAX_CARD_VOLUME = 5

# How many copies of each card exist, indexed by fruit volume (0 = one fruit).
CARD_COPIES = (5, 3, 3, 2, 1)


class CardType(IntEnum):
    """The fruit shown on a card."""

    STRAWBERRY = 0
    BANANA = 1
    LIME = 2
    PRUNE = 3


@dataclass(frozen=True)
class Card:
    """A single card.

    ``volume`` is the fruit-count index: 0 stands for one fruit, 4 for five.
    """

    id: int
    type: CardType
    volume: int


@dataclass
class CardDeck:
    """An ordered pile of cards; the front is index 0, the top is the end."""

    cards: list[Card] = field(default_factory=list)

    @classmethod
    def full(cls, rng: random.Random | None = None) -> CardDeck:
        """Build the complete shuffled deck of 56 cards."""
        cards = [
            Card(0, card_type, volume)
            for volume, copies in enumerate(CARD_COPIES)
            for _ in range(copies)
            for card_type in CardType
        ]
        deck = cls([Card(card_id, c.type, c.volume) for card_id, c in enumerate(cards)])
        deck.shuffle(rng)
        return deck

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Shuffle the deck in place."""
        (rng or random.Random()).shuffle(self.cards)

    def split_from(self, source: Iterable[Card], index: int, count: int) -> int:
        """Append ``count`` cards of ``source`` starting at ``index``.

        The source is left unchanged. Returns the index just past the copied
        cards, where the next split should start.
        """
        source_cards = list(source)
        end = index + count
        if index < 0 or count < 0 or end > len(source_cards):
            raise IndexError(
                f"cannot take {count} cards from index {index} of a deck of "
                f"{len(source_cards)}"
            )
        self.cards.extend(source_cards[index:end])
        return end

    def draw(self) -> Card:
        """Remove and return the top (last) card."""
        if not self.cards:
            raise IndexError("draw from an empty deck")
        return self.cards.pop()

    def put(self, card: Card) -> None:
        """Place a card at the front of the deck."""
        self.cards.insert(0, card)

    def put_deck(self, other: Iterable[Card]) -> None:
        """Append every card of ``other`` after the cards already here."""
        self.cards.extend(other)

    def front(self) -> Card:
        """Return the card at the front without removing it."""
        if not self.cards:
            raise IndexError("empty deck has no front card")
        return self.cards[0]

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)