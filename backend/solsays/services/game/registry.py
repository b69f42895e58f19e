import random
import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .errors import InvalidState
from .rewards import RewardSystem
from .signals import Difficulty
from .state import GameState, GameStateManager, build_game


class _Entry:
    __slots__ = ('manager', 'lock')

    def __init__(self, manager: GameStateManager):
        self.manager = manager
        self.lock = threading.Lock()


class SessionRegistry:
    """One game session per player id, each behind its own lock.

    The engine assumes a single in-flight mutation per session; routes go
    through ``session()`` so concurrent requests for the same player
    serialise while different players proceed independently.

    At most ``max_sessions`` are kept. Starting a session beyond that evicts
    the least recently used one.
    """

    def __init__(self, difficulty='novice',
                 rng_factory: Optional[Callable[[], random.Random]] = None,
                 reward_system: Optional[RewardSystem] = None,
                 max_sessions: int = 1000):
        if max_sessions < 1:
            raise ValueError('max_sessions must be at least 1')
        self.default_difficulty = Difficulty.parse(difficulty)
        self.rng_factory = rng_factory or random.Random
        self.reward_system = reward_system or RewardSystem()
        self.max_sessions = max_sessions
        self._entries: 'OrderedDict[str, _Entry]' = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, player_id) -> bool:
        return str(player_id) in self._entries

    def start(self, player_id, difficulty=None) -> GameState:
        """Reset the player's session, building a new one on first use or a difficulty change."""
        key = str(player_id)
        wanted = Difficulty.parse(difficulty, default=self.default_difficulty)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry(self._build(wanted))
                while len(self._entries) > self.max_sessions:
                    self._entries.popitem(last=False)
            else:
                self._entries.move_to_end(key)
        with entry.lock:
            if entry.manager.difficulty != wanted:
                entry.manager = self._build(wanted)
            entry.manager.reset()
            return entry.manager.get_game_state()

    @contextmanager
    def session(self, player_id) -> Iterator[GameStateManager]:
        key = str(player_id)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                self._entries.move_to_end(key)
        if entry is None:
            raise InvalidState(f'No game in progress for player {player_id}; start a game first')
        with entry.lock:
            yield entry.manager

    def discard(self, player_id) -> bool:
        with self._lock:
            return self._entries.pop(str(player_id), None) is not None

    def _build(self, difficulty: Difficulty) -> GameStateManager:
        return build_game(difficulty, rng=self.rng_factory(), reward_system=self.reward_system)
