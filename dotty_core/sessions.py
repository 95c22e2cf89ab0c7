from __future__ import annotations

import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional

from .engine import GridEngine
from .feedback import ToneLadder
from .log import get_logger

log = get_logger("sessions")

MAX_SESSIONS = 1024


@dataclass
class GameSession:
    """One game: its engine, tone state and the lock serialising access to both."""
    game_id: str
    engine: GridEngine
    tones: ToneLadder = field(default_factory=ToneLadder)
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionStore:
    """Registry of live games keyed by id. Hold ``session.lock`` while touching the engine.

    Holds at most ``max_sessions`` games; creating one past the cap evicts the
    least recently used.
    """

    def __init__(self, max_sessions: int = MAX_SESSIONS) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, GameSession]" = OrderedDict()
        self._guard = threading.Lock()

    def create(self, seed: Optional[int] = None) -> GameSession:
        engine = GridEngine(seed=seed)
        engine.new_game()
        session = GameSession(game_id=uuid.uuid4().hex, engine=engine)
        with self._guard:
            self._sessions[session.game_id] = session
            while len(self._sessions) > self.max_sessions:
                old_id, _ = self._sessions.popitem(last=False)
                log.info("evicted game %s", old_id)
        log.info("created game %s", session.game_id)
        return session

    def get(self, game_id: str) -> GameSession:
        with self._guard:
            session = self._sessions[game_id]
            self._sessions.move_to_end(game_id)
            return session

    def discard(self, game_id: str) -> bool:
        with self._guard:
            return self._sessions.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._guard:
            return len(self._sessions)

    def __contains__(self, game_id: object) -> bool:
        with self._guard:
            return game_id in self._sessions
