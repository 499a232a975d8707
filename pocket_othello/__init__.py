"""Othello board engine, minimax opponent and headless game session"""

__version__ = "0.1.0"
