from typing import Callable

from .store import RoomStore


def relay_message(store: RoomStore, broadcast: Callable, room_code, connection_id: str, message) -> None:
    """Relay a chat message to everyone in the room, unmodified."""
    session = store.get(room_code)
    if session is None:
        return
    broadcast('receiveMessage', {
        'playerId': connection_id,
        'playerName': session.display_names.get(connection_id),
        'message': message,
    }, room_code)
