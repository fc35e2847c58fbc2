"""Console front end for the blackjack engine."""

from console_ui.app import ConsoleGame, main

__all__ = ["ConsoleGame", "main"]
