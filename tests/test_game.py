import random

import pytest

from halligalli.card import MAX_CARD_NUM, Card, CardDeck, CardType
from halligalli.game import MAX_PLAYER_NUM, Game, GameError, GameStatus
from halligalli.player import Player, PlayerStatus


def _game_with(count):
    game = Game(CardDeck.full(random.Random(7)))
    for player_id in range(count):
        game.join(Player(player_id))
    return game


def _started(count):
    game = _game_with(count)
    game.start()
    return game


def test_new_game_defaults():
    game = Game(CardDeck.full(random.Random(1)))
    assert game.status == GameStatus.INIT
    assert game.players == []
    assert game.player_turn == 0
    assert len(game.deck) == MAX_CARD_NUM


def test_join_sets_player_init():
    game = _game_with(2)
    assert game.join_num == 2
    assert all(p.status == PlayerStatus.INIT for p in game.players)


def test_join_rejects_beyond_maximum():
    game = _game_with(MAX_PLAYER_NUM)
    with pytest.raises(GameError):
        game.join(Player(99))
    assert game.join_num == MAX_PLAYER_NUM


def test_join_rejected_after_start():
    game = _started(1)
    with pytest.raises(GameError):
        game.join(Player(5))


def test_ready_marks_matching_player():
    game = _game_with(3)
    game.ready(Player(1))
    statuses = [p.status for p in game.players]
    assert statuses == [PlayerStatus.INIT, PlayerStatus.READY, PlayerStatus.INIT]


def test_ready_fails_with_full_table():
    game = _game_with(MAX_PLAYER_NUM)
    with pytest.raises(GameError):
        game.ready(Player(0))


def test_is_ready_needs_a_player():
    game = Game(CardDeck.full(random.Random(2)))
    assert game.is_ready() is False
    game.join(Player(0))
    assert game.is_ready() is True


def test_is_ready_raises_after_start():
    game = _started(1)
    with pytest.raises(GameError):
        game.is_ready()


@pytest.mark.parametrize("count", [1, 2, 3, 4, 6])
def test_start_deals_equal_distinct_hands(count):
    game = _started(count)
    assert game.status == GameStatus.START
    assert all(p.status == PlayerStatus.GAMING for p in game.players)
    assert all(len(p.deck) == MAX_CARD_NUM // count for p in game.players)
    ids = [card.id for p in game.players for card in p.deck]
    assert len(ids) == len(set(ids))
    assert len(game.deck) == MAX_CARD_NUM


def test_start_without_players_raises():
    game = Game(CardDeck.full(random.Random(3)))
    with pytest.raises(GameError):
        game.start()


def test_distribute_before_start_raises():
    game = _game_with(2)
    with pytest.raises(GameError):
        game.distribute_cards()


def test_end_turn_rotates_through_players():
    game = _started(2)
    first, second = game.players
    game.end_turn(first)
    assert game.player_turn == second.id
    game.end_turn(second)
    assert game.player_turn == first.id
    assert game.turn == 0


def test_end_turn_by_wrong_player_raises():
    game = _started(2)
    with pytest.raises(GameError):
        game.end_turn(game.players[1])


def test_put_card_on_table_moves_top_card():
    game = _started(2)
    player = game.players[0]
    top = player.deck.cards[-1]
    before = len(player.deck)
    game.put_card_on_table(player)
    assert len(player.deck) == before - 1
    assert player.table.front() == top


def test_put_card_requires_gaming_player():
    game = _started(2)
    player = game.players[0]
    game.defeat_player(player)
    with pytest.raises(GameError):
        game.put_card_on_table(player)


def test_valid_bell_takes_table_cards():
    game = _started(2)
    ringer, other = game.players
    ringer.table.put(Card(100, CardType.BANANA, 1))
    other.table.put(Card(101, CardType.BANANA, 2))
    before = len(ringer.deck)
    assert game.is_valid_bell() is True
    assert game.ring_bell(ringer) is True
    assert len(ringer.deck) == before + 1
    assert ringer.deck.front().id == 101
    assert len(other.table) == 0


def test_invalid_bell_gives_cards_away():
    game = _started(3)
    ringer = game.players[0]
    ringer.table.put(Card(100, CardType.LIME, 0))
    game.players[1].table.put(Card(101, CardType.PRUNE, 0))
    ringer_before = len(ringer.deck)
    others_before = [len(p.deck) for p in game.players[1:]]
    assert game.ring_bell(ringer) is False
    assert len(ringer.deck) == ringer_before - 2
    assert [len(p.deck) for p in game.players[1:]] == [n + 1 for n in others_before]


def test_bell_invalid_with_empty_tables():
    game = _started(2)
    assert game.is_valid_bell() is False


def test_defeat_player_once():
    game = _started(2)
    player = game.players[1]
    game.defeat_player(player)
    assert player.status == PlayerStatus.LOSE
    with pytest.raises(GameError):
        game.defeat_player(player)


def test_find_player():
    game = _game_with(3)
    assert game.find_player(2) is game.players[2]
    with pytest.raises(KeyError):
        game.find_player(42)


def test_end_sets_status_and_blocks_play():
    game = _started(2)
    game.end()
    assert game.status == GameStatus.END
    with pytest.raises(GameError):
        game.ring_bell(game.players[0])