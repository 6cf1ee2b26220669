"""MiniChess: 6x5 chess variant rules and a minimax engine."""

__version__ = "0.1.0"
