from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set
import time


class Phase(str, Enum):
    ANSWERING = 'answer'
    GUESSING = 'guess'


@dataclass
class Guess:
    value: str
    target_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'guess': self.value,
            'targetPlayerId': self.target_id,
        }


@dataclass
class Session:
    """Per-room game state. Owned by the RoomStore, keyed by room code."""

    room_code: str
    questions: List[Any]
    participants: List[str] = field(default_factory=list)
    display_names: Dict[str, str] = field(default_factory=dict)
    scores: Dict[str, int] = field(default_factory=dict)
    round_index: int = 0
    answers: Dict[int, Dict[str, str]] = field(default_factory=dict)
    guesses: Dict[int, Dict[str, Guess]] = field(default_factory=dict)
    phase: Phase = Phase.ANSWERING
    pending_submitters: Set[str] = field(default_factory=set)
    started: bool = False
    last_activity: float = field(default_factory=time.time)

    @property
    def is_empty(self) -> bool:
        return not self.participants

    @property
    def game_over(self) -> bool:
        return self.round_index >= len(self.questions)

    @property
    def current_question(self):
        if self.game_over:
            return None
        return self.questions[self.round_index]

    def touch(self, now: Optional[float] = None) -> None:
        self.last_activity = time.time() if now is None else now

    def roster(self) -> List[Dict[str, str]]:
        return [{'id': pid, 'name': self.display_names.get(pid)} for pid in self.participants]

    def answers_for(self, round_index: int) -> Dict[str, str]:
        return dict(self.answers.get(round_index, {}))

    def guesses_for(self, round_index: int) -> Dict[str, Dict[str, Any]]:
        return {pid: g.to_dict() for pid, g in self.guesses.get(round_index, {}).items()}
