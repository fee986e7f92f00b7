import copy
import logging
import random
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence

from partnerquiz.errors import GameError
from partnerquiz.models import Session

logger = logging.getLogger(__name__)


def select_questions(bank: Sequence[Any], count: int) -> List[Any]:
    """Pick ``min(count, len(bank))`` distinct questions uniformly at random.

    Shuffles a copy of the bank (Fisher-Yates) and takes a prefix.
    """
    pool = list(bank)
    random.shuffle(pool)
    return pool[:min(count, len(pool))]


class RoomStore:
    """In-memory mapping of room code -> Session.

    The only place session state lives. Created once per app in
    ``create_app`` and shared by every handler via ``app.extensions``.
    """

    def __init__(self, questions: Sequence[Any], questions_per_game: int = 10):
        self.questions = list(questions)
        self.questions_per_game = questions_per_game
        self.rooms: Dict[str, Session] = {}
        # Held by the socket handlers for the duration of each action
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self.rooms)

    def __contains__(self, room_code) -> bool:
        return isinstance(room_code, str) and room_code in self.rooms

    def get(self, room_code) -> Optional[Session]:
        if not isinstance(room_code, str):
            return None
        return self.rooms.get(room_code)

    def create(self, room_code: str) -> Session:
        session = Session(
            room_code=room_code,
            questions=select_questions(self.questions, self.questions_per_game),
        )
        self.rooms[room_code] = session
        logger.info(f"[room-create] room={room_code} questions={len(session.questions)}")
        return session

    def delete(self, room_code) -> Optional[Session]:
        return self.rooms.pop(room_code, None)

    def items(self) -> List:
        # Snapshot so callers may delete while iterating
        return list(self.rooms.items())

    def find_by_connection(self, connection_id: str) -> Optional[str]:
        """Return the code of the room holding ``connection_id``, if any.

        A connection is a participant of at most one room at a time.
        """
        for room_code, session in self.rooms.items():
            if connection_id in session.participants:
                return room_code
        return None

    @contextmanager
    def rollback_on_error(self, room_code) -> Iterator[None]:
        """Restore the room to its prior state if the wrapped action raises.

        A room created during the failed action is removed again.
        """
        with self.lock:
            existed = isinstance(room_code, str) and room_code in self.rooms
            snapshot = copy.deepcopy(self.rooms[room_code]) if existed else None
            try:
                yield
            except Exception as exc:
                if existed:
                    self.rooms[room_code] = snapshot
                elif isinstance(room_code, str):
                    self.rooms.pop(room_code, None)
                if not isinstance(exc, GameError):
                    logger.warning(f"[rollback] room={room_code} restored={existed}")
                raise
