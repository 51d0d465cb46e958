"""Game state and rules for a round of Halli Galli."""

from __future__ import annotations

from collections import Counter
from enum import IntEnum

from halligalli.card import MAX_CARD_NUM, CardDeck, CardType
from halligalli.player import Player, PlayerStatus

MAX_PLAYER_NUM = 6
BELL_FRUIT_COUNT = 5


class GameStatus(IntEnum):
    """Phase the game is in."""

    INIT = 0
    READY = 1
    START = 2
    END = 3


class GameError(Exception):
    """Raised when an action is not allowed in the current game or player state."""


class Game:
    """A Halli Galli table: the players, the full deck and whose turn it is."""

    def __init__(self, deck: CardDeck | None = None) -> None:
        self.deck = deck if deck is not None else CardDeck.full()
        self.players: list[Player] = []
        self.player_turn = 0
        self.turn = 0
        self.status = GameStatus.INIT

    @property
    def join_num(self) -> int:
        """Number of players at the table."""
        return len(self.players)

    def _require_status(self, status: GameStatus) -> None:
        if self.status != status:
            raise GameError(f"game status is {self.status.name}, not {status.name}")

    def _require_playing(self, player: Player) -> None:
        self._require_status(GameStatus.START)
        if player.status != PlayerStatus.GAMING:
            raise GameError(f"player {player.id} is {player.status.name}, not GAMING")

    def join(self, player: Player) -> None:
        """Seat a player while the game is still gathering players."""
        self._require_status(GameStatus.INIT)
        if self.join_num >= MAX_PLAYER_NUM:
            raise GameError(f"no more than {MAX_PLAYER_NUM} players may join")
        player.status = PlayerStatus.INIT
        self.players.append(player)

    def ready(self, player: Player) -> None:
        """Mark every seated player with this player's id as ready."""
        self._require_status(GameStatus.INIT)
        if self.join_num >= MAX_PLAYER_NUM:
            raise GameError(f"join count has reached {MAX_PLAYER_NUM}")
        for seated in self.players:
            if seated.id == player.id:
                seated.status = PlayerStatus.READY

    def is_ready(self) -> bool:
        """True once at least one player has joined."""
        self._require_status(GameStatus.INIT)
        return self.join_num >= 1

    def start(self) -> None:
        """Start play: every player is in the game and receives a hand."""
        self.status = GameStatus.START
        for player in self.players:
            player.status = PlayerStatus.GAMING
        self.distribute_cards()

    def distribute_cards(self) -> None:
        """Deal an equal share of the deck to each player's hand."""
        self._require_status(GameStatus.START)
        if not self.players:
            raise GameError("no players to deal cards to")
        share = MAX_CARD_NUM // self.join_num
        index = 0
        for player in self.players:
            index = player.deck.split_from(self.deck, index, share)

    def end_turn(self, player: Player) -> None:
        """Pass the turn from ``player`` to the next seated player."""
        self._require_playing(player)
        if self.player_turn != player.id:
            raise GameError(f"it is not player {player.id}'s turn")
        self.turn = (self.turn + 1) % self.join_num
        self.player_turn = self.players[self.turn].id

    def put_card_on_table(self, player: Player) -> None:
        """Move the top card of the player's hand to the front of their table pile."""
        self._require_playing(player)
        player.table.put(player.deck.draw())

    def take_cards_from_tables(self, player: Player) -> None:
        """Give ``player`` the top table card of every other player."""
        self._require_playing(player)
        for other in self.players:
            if other.id != player.id and len(other.table):
                player.deck.put(other.table.draw())

    def give_cards_to_players(self, player: Player) -> None:
        """Hand one card from ``player``'s hand to every other player."""
        self._require_playing(player)
        for other in self.players:
            if other.id == player.id:
                continue
            if player.is_deck_empty():
                break
            other.deck.put(player.deck.draw())

    def defeat_player(self, player: Player) -> None:
        """Mark a playing player as having lost."""
        self._require_playing(player)
        player.status = PlayerStatus.LOSE

    def is_valid_bell(self) -> bool:
        """True when the visible table cards show exactly five of some fruit."""
        fruit: Counter[CardType] = Counter()
        for player in self.players:
            if len(player.table):
                card = player.table.front()
                fruit[card.type] += card.volume + 1
        return any(fruit[card_type] == BELL_FRUIT_COUNT for card_type in CardType)

    def ring_bell(self, player: Player) -> bool:
        """Resolve a bell ring by ``player``; return whether it was valid.

        A valid ring wins the other players' top table cards; an invalid one
        costs the ringer a card to each other player.
        """
        self._require_playing(player)
        if self.is_valid_bell():
            self.take_cards_from_tables(player)
            return True
        self.give_cards_to_players(player)
        return False

    def find_player(self, player_id: int) -> Player:
        """Return the seated player with the given id."""
        for player in self.players:
            if player.id == player_id:
                return player
        raise KeyError(player_id)

    def end(self) -> None:
        """Finish the game."""
        self.status = GameStatus.END