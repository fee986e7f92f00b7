import logging
from typing import Callable, Optional

from .store import RoomStore

logger = logging.getLogger(__name__)


def leave(store: RoomStore, broadcast: Callable, connection_id: str) -> Optional[str]:
    """Remove a departing connection from its room.

    Notifies the room with ``playerLeft`` and deletes the room once nobody is
    left. Submissions already recorded for the current round stay in place;
    the remaining player gets no further round progress until a partner
    joins. Returns the room code, or None if the connection was in no room.
    """
    room_code = store.find_by_connection(connection_id)
    if room_code is None:
        return None
    session = store.get(room_code)

    player_name = session.display_names.get(connection_id)
    session.participants.remove(connection_id)
    session.display_names.pop(connection_id, None)
    session.scores.pop(connection_id, None)
    logger.info(f"[leave] room={room_code} sid={connection_id} remaining={len(session.participants)}")

    broadcast('playerLeft', {
        'playerId': connection_id,
        'playerName': player_name,
    }, room_code)

    if session.is_empty:
        store.delete(room_code)
        logger.info(f"[room-delete] room={room_code} reason=empty")
    return room_code
