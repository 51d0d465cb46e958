"""Halli Galli cards, players, game rules, JSON messages and a TCP game server."""

__version__ = "0.1.0"
__all__ = ["card", "player", "game", "serializer", "server"]