import logging
import re
from typing import Callable, Optional

from partnerquiz.errors import AlreadyJoined, InvalidRoomCode, RoomFull
from partnerquiz.models import Phase, Session
from .store import RoomStore

logger = logging.getLogger(__name__)

MAX_PLAYERS = 2
NAME_MAX_LENGTH = 20

_ROOM_CODE_RE = re.compile(r'[0-9]{6}')
_UNSAFE_NAME_CHARS_RE = re.compile(r'[<>&"\']')


def is_valid_room_code(room_code) -> bool:
    return isinstance(room_code, str) and _ROOM_CODE_RE.fullmatch(room_code) is not None


def sanitize_player_name(name, join_order: int) -> str:
    """Truncate to NAME_MAX_LENGTH and drop HTML-significant characters.

    Falls back to ``Player {join_order}`` when nothing usable is left.
    """
    if isinstance(name, str):
        cleaned = _UNSAFE_NAME_CHARS_RE.sub('', name[:NAME_MAX_LENGTH]).strip()
        if cleaned:
            return cleaned
    return f'Player {join_order}'


def join(
    store: RoomStore,
    broadcast: Callable,
    room_code,
    connection_id: str,
    player_name: Optional[str] = None,
    on_admitted: Optional[Callable] = None,
) -> Session:
    """Admit ``connection_id`` into ``room_code``, creating the room on first arrival.

    Raises InvalidRoomCode, RoomFull or AlreadyJoined without touching any
    room state. A repeated join to the room the connection already sits in
    returns that room unchanged and broadcasts nothing.
    Broadcasts ``playerJoined``, plus ``startGame`` the first time the room
    fills up. ``on_admitted(room_code)`` runs before any broadcast so the
    caller can subscribe the connection to the room channel first.
    """
    if not is_valid_room_code(room_code):
        raise InvalidRoomCode()

    seated_in = store.find_by_connection(connection_id)
    if seated_in == room_code:
        return store.get(room_code)
    if seated_in is not None:
        raise AlreadyJoined()

    existing = store.get(room_code)
    if existing is not None and len(existing.participants) >= MAX_PLAYERS:
        raise RoomFull()
    session = existing or store.create(room_code)

    session.participants.append(connection_id)
    display_name = sanitize_player_name(player_name, len(session.participants))
    session.display_names[connection_id] = display_name
    session.scores[connection_id] = 0
    session.touch()
    logger.info(f"[join] room={room_code} sid={connection_id} name={display_name!r} players={len(session.participants)}")

    if on_admitted is not None:
        on_admitted(room_code)

    broadcast('playerJoined', {
        'playerId': connection_id,
        'playerName': display_name,
        'players': session.roster(),
    }, room_code)

    if len(session.participants) == MAX_PLAYERS and not session.started:
        session.started = True
        logger.info(f"[start] room={room_code} questions={len(session.questions)}")
        broadcast('startGame', {
            'question': session.questions[0],
            'questionIndex': 0,
            'phase': Phase.ANSWERING.value,
        }, room_code)

    return session
