"""Turn controller and computer players"""

from .bot import ComputerPlayer
from .session import GameSession

__all__ = [
    'ComputerPlayer',
    'GameSession',
]
