"""TCP game server that seats players and runs a Halli Galli table."""

from __future__ import annotations

import argparse
import socket
import threading
from collections.abc import Callable, Sequence

from halligalli.card import MAX_CARD_NUM
from halligalli.game import Game, GameError, GameStatus
from halligalli.player import Player, PlayerStatus
from halligalli.serializer import (
    deserialize_player_action,
    serialize_send_action,
    serialize_send_data,
)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 4848
MAX_BUFFER_SIZE = 128
MAX_CLIENT_NUM = 6

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "MAX_BUFFER_SIZE",
    "MAX_CARD_NUM",
    "MAX_CLIENT_NUM",
    "HalliGalliServer",
    "create_server_socket",
    "main",
    "system_message",
]


def system_message(message: str) -> None:
    """Print a server progress message."""
    print(message)


def create_server_socket(host: str, port: int, backlog: int) -> socket.socket:
    """Open a listening TCP socket with address reuse enabled."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        listener.bind((host, port))
        listener.listen(backlog)
    except OSError:
        listener.close()
        raise
    return listener


class HalliGalliServer:
    """Accepts players on a listening socket and plays one game with them.

    Each player is identified by the descriptor number of their connection.
    Every message in either direction is a fixed block of ``MAX_BUFFER_SIZE``
    bytes holding NUL-padded JSON.
    """

    def __init__(self, listener: socket.socket, game: Game) -> None:
        self.listener = listener
        self.game = game
        self.connections: dict[int, socket.socket] = {}
        self.lock = threading.RLock()

    def _send(self, player_id: int, payload: bytes) -> None:
        self.connections[player_id].sendall(payload.ljust(MAX_BUFFER_SIZE, b"\0"))

    @staticmethod
    def _receive(connection: socket.socket) -> bytes:
        data = connection.recv(MAX_BUFFER_SIZE)
        if not data:
            raise ConnectionError("connection closed by player")
        return data

    def wait_players(self) -> None:
        """Seat connecting players until one says no more are wanted."""
        while True:
            connection, _ = self.listener.accept()
            player = Player(connection.fileno())

            if self.game.status != GameStatus.INIT:
                system_message("game is not accepting players")
                self.send_all(PlayerStatus.DENY)
                connection.close()
                return

            self.connections[player.id] = connection
            self.send_action(player)

            with self.lock:
                self.game.join(player)

            self.receive_action(connection)

            if self.game.players[-1].status == PlayerStatus.NOT_WANT:
                return

    def receive_action(self, connection: socket.socket) -> int:
        """Read one lobby message from ``connection`` and act on it."""
        action = deserialize_player_action(self._receive(connection))
        player_id = connection.fileno()

        if action == PlayerStatus.READY:
            with self.lock:
                player = self.game.find_player(player_id)
                self.game.ready(player)
                self.send_action(player)
        elif action == PlayerStatus.NOT_WANT:
            with self.lock:
                self.game.find_player(player_id).status = PlayerStatus.NOT_WANT
        return action

    def send_action(self, player: Player) -> None:
        """Tell a player their own status and whose turn it is."""
        with self.lock:
            payload = serialize_send_action(
                player.id, self.game.player_turn, player.status, MAX_BUFFER_SIZE
            )
        self._send(player.id, payload)

    def send_all(self, status: PlayerStatus) -> None:
        """Broadcast the table-wide notice that belongs to ``status``."""
        with self.lock:
            players = list(self.game.players)
            turn = self.game.player_turn

        if status == PlayerStatus.START:
            for player in players:
                self._send(
                    player.id,
                    serialize_send_action(player.id, turn, PlayerStatus.GAMING, MAX_BUFFER_SIZE),
                )
        elif status == PlayerStatus.GAMING:
            for player in players:
                if player.id == turn:
                    self._send(
                        player.id,
                        serialize_send_action(player.id, turn, PlayerStatus.TURN, MAX_BUFFER_SIZE),
                    )
                if player.status == PlayerStatus.READY:
                    self._send(
                        player.id,
                        serialize_send_action(
                            player.id, turn, PlayerStatus.GAMING, MAX_BUFFER_SIZE
                        ),
                    )

    def send_data(self, player: Player) -> None:
        """Send the table view to one player."""
        with self.lock:
            payload = serialize_send_data(self.game, MAX_BUFFER_SIZE)
        self._send(player.id, payload)

    def _apply(self, rule: Callable[[Player], object], player: Player) -> None:
        with self.lock:
            try:
                rule(player)
            except (GameError, IndexError) as exc:
                system_message(str(exc))

    def _eliminate(self, player: Player) -> None:
        with self.lock:
            player.status = PlayerStatus.LOSE
            players = self.game.players
            if player in players:
                seat = players.index(player)
                players.remove(player)
                if players:
                    if seat < self.game.turn:
                        self.game.turn -= 1
                    self.game.turn %= len(players)
                    self.game.player_turn = players[self.game.turn].id
            payload = serialize_send_action(
                player.id, self.game.player_turn, PlayerStatus.LOSE, MAX_BUFFER_SIZE
            )
        self._send(player.id, payload)

    def play(self, player: Player) -> None:
        """Serve one player's moves until they lose or disconnect."""
        connection = self.connections[player.id]
        while True:
            try:
                data = self._receive(connection)
            except OSError:
                system_message(f"player {player.id} left the game")
                return
            action = deserialize_player_action(data)

            if self.game.player_turn == player.id:
                if action == PlayerStatus.DRAW:
                    self._apply(self.game.put_card_on_table, player)
                    self.send_data(player)
                elif action == PlayerStatus.BELL:
                    self._apply(self.game.ring_bell, player)
                    self.send_data(player)
                elif action == PlayerStatus.TURN_END:
                    self._apply(self.game.end_turn, player)
                    with self.lock:
                        payload = serialize_send_action(
                            player.id, self.game.player_turn, PlayerStatus.GAMING, MAX_BUFFER_SIZE
                        )
                    self._send(player.id, payload)
            elif player.status == PlayerStatus.GAMING and action == PlayerStatus.BELL:
                self._apply(self.game.ring_bell, player)
                self.send_data(player)

            if player.is_deck_empty():
                self._eliminate(player)
                return

    def _close(self) -> None:
        for connection in self.connections.values():
            connection.close()
        self.connections.clear()
        self.listener.close()

    def run(self) -> None:
        """Gather players, start the game and serve it until everyone is done."""
        try:
            system_message("wait player")
            self.wait_players()
            if not self.game.players:
                system_message("no players joined")
                return

            system_message("wait player ready")
            last = self.game.players[-1]
            self.send_action(last)
            self.receive_action(self.connections[last.id])

            system_message("Game Start")
            with self.lock:
                self.game.start()
                self.game.player_turn = self.game.players[self.game.turn].id

            system_message("send game start message to all players")
            self.send_all(PlayerStatus.GAMING)

            threads = []
            for player in list(self.game.players):
                system_message("create player in game thread")
                thread = threading.Thread(target=self.play, args=(player,), daemon=True)
                thread.start()
                threads.append(thread)

            system_message("game start")
            for thread in threads:
                thread.join()

            system_message("game end")
            self.game.end()
        finally:
            self._close()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game server from the command line."""
    parser = argparse.ArgumentParser(description="Serve a Halli Galli game over TCP.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    listener = create_server_socket(args.host, args.port, MAX_CLIENT_NUM)
    HalliGalliServer(listener, Game()).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())