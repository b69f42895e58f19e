"""Game domain services: patterns, rewards, input validation and sessions.

This package contains pure domain logic that should be imported by HTTP
routes and socket handlers, keeping transport concerns separated from core
game mechanics. Nothing in here touches Flask, the database or the network.
"""

from .errors import GameError, InvalidDifficulty, InvalidLevel, InvalidSignal, InvalidState
from .signals import Difficulty, DifficultyProfile, Pattern, Signal, PROFILES
from .patterns import PatternController
from .rewards import RewardSystem
from .buttons import ButtonController, InputResult
from .state import GamePhase, GameState, GameStateManager, build_game
from .registry import SessionRegistry

__all__ = [
    'ButtonController',
    'Difficulty',
    'DifficultyProfile',
    'GameError',
    'GamePhase',
    'GameState',
    'GameStateManager',
    'InputResult',
    'InvalidDifficulty',
    'InvalidLevel',
    'InvalidSignal',
    'InvalidState',
    'PROFILES',
    'Pattern',
    'PatternController',
    'RewardSystem',
    'SessionRegistry',
    'Signal',
    'build_game',
]
