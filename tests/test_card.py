import random
from collections import Counter

import pytest

from halligalli.card import (
    CARD_COPIES,
    MAX_CARD_NUM,
    MAX_CARD_TYPE,
    MAX_CARD_VOLUME,
    Card,
    CardDeck,
    CardType,
)


def _deck(n):
    return CardDeck([Card(i, CardType(i % MAX_CARD_TYPE), i % MAX_CARD_VOLUME) for i in range(n)])


def test_full_deck_uses_every_card_type():
    deck = CardDeck.full(random.Random(5))
    values = sorted({c.type.value for c in deck})
    assert values == [0, 1, 2, 3]
    per_type = Counter(c.type for c in deck)
    assert per_type[CardType.PRUNE] == MAX_CARD_NUM // MAX_CARD_TYPE


def test_full_deck_size_and_ids():
    deck = CardDeck.full(random.Random(1))
    assert len(deck) == MAX_CARD_NUM
    assert sorted(c.id for c in deck) == list(range(MAX_CARD_NUM))


def test_full_deck_composition():
    deck = CardDeck.full(random.Random(2))
    counts = Counter((c.type, c.volume) for c in deck)
    for card_type in CardType:
        for volume, copies in enumerate(CARD_COPIES):
            assert counts[(card_type, volume)] == copies


def test_full_deck_is_deterministic_with_seed():
    a = CardDeck.full(random.Random(7))
    b = CardDeck.full(random.Random(7))
    assert a == b


def test_shuffle_preserves_cards():
    deck = _deck(20)
    before = Counter(deck)
    deck.shuffle(random.Random(3))
    assert Counter(deck) == before


def test_split_from_appends_and_returns_end():
    source = _deck(10)
    target = CardDeck([Card(99, CardType.LIME, 1)])
    end = target.split_from(source, 2, 3)
    assert end == 5
    assert list(target) == [Card(99, CardType.LIME, 1)] + source.cards[2:5]
    assert len(source) == 10


def test_split_from_chains():
    source = _deck(12)
    first, second = CardDeck(), CardDeck()
    index = first.split_from(source, 0, 6)
    index = second.split_from(source, index, 6)
    assert index == 12
    assert list(first) + list(second) == list(source)


@pytest.mark.parametrize("index,count", [(-1, 2), (8, 3), (0, 11)])
def test_split_from_out_of_range(index, count):
    target = CardDeck()
    with pytest.raises(IndexError):
        target.split_from(_deck(10), index, count)
    assert len(target) == 0


def test_draw_takes_last_card():
    deck = _deck(4)
    last = deck.cards[-1]
    assert deck.draw() == last
    assert len(deck) == 3
    assert last not in deck.cards


def test_draw_empty_raises():
    with pytest.raises(IndexError):
        CardDeck().draw()


def test_put_inserts_at_front():
    deck = _deck(3)
    card = Card(50, CardType.BANANA, 4)
    deck.put(card)
    assert deck.front() == card
    assert len(deck) == 4


def test_front_empty_raises():
    with pytest.raises(IndexError):
        CardDeck().front()


def test_put_deck_appends_in_order():
    first, second = _deck(3), _deck(5)
    expected = list(first) + list(second)
    first.put_deck(second)
    assert list(first) == expected
    assert len(second) == 5


def test_draw_then_put_round_trip():
    source, table = _deck(5), CardDeck()
    drawn = [source.draw() for _ in range(5)]
    for card in drawn:
        table.put(card)
    assert list(table) == list(reversed(drawn))
    assert len(source) == 0