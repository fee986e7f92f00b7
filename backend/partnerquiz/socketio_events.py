from flask import current_app, request
from flask_socketio import join_room, leave_room

from partnerquiz import socketio
from partnerquiz.errors import GameError
from partnerquiz.services.games.admission import join
from partnerquiz.services.games.messages import relay_message
from partnerquiz.services.games.presence import leave
from partnerquiz.services.games.rounds import submit_answer, submit_guess
from partnerquiz.services.games.store import RoomStore

_namespace = '/'


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _store() -> RoomStore:
    return current_app.extensions['room_store']


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def _broadcast(event: str, payload, room_code: str) -> None:
    socketio.emit(event, payload, to=room_code, namespace=_namespace)


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    store = _store()
    try:
        with store.lock:
            room_code = store.find_by_connection(sid)
            if room_code is not None:
                with store.rollback_on_error(room_code):
                    leave(store, _broadcast, sid)
    except Exception:
        current_app.logger.exception(f"[disconnect] failed sid={sid}")
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")


def handle_join_room(data):
    """Admit the caller; the return value is the Socket.IO acknowledgement."""
    data = _payload(data)
    room_code = data.get('roomCode')
    sid = _get_sid()
    store = _store()
    try:
        with store.rollback_on_error(room_code):
            join(store, _broadcast, room_code, sid, data.get('playerName'), on_admitted=join_room)
    except GameError as exc:
        current_app.logger.info(f"[join-rejected] room={room_code} sid={sid} reason={exc.message}")
        return {'success': False, 'message': exc.message}
    except Exception:
        current_app.logger.exception(f"[join] failed room={room_code} sid={sid}")
        if isinstance(room_code, str):
            leave_room(room_code)
        return {'success': False, 'message': 'Internal server error'}
    return {'success': True}


def handle_submit_answer(data):
    data = _payload(data)
    room_code = data.get('roomCode')
    store = _store()
    try:
        with store.rollback_on_error(room_code):
            submit_answer(store, _broadcast, room_code, data.get('questionIndex'), _get_sid(), data.get('answer'))
    except Exception:
        current_app.logger.exception(f"[submitAnswer] failed room={room_code}")


def handle_submit_guess(data):
    data = _payload(data)
    room_code = data.get('roomCode')
    store = _store()
    try:
        with store.rollback_on_error(room_code):
            submit_guess(
                store,
                _broadcast,
                room_code,
                data.get('questionIndex'),
                _get_sid(),
                data.get('guess'),
                data.get('targetPlayerId'),
            )
    except Exception:
        current_app.logger.exception(f"[submitGuess] failed room={room_code}")


def handle_send_message(data):
    data = _payload(data)
    room_code = data.get('roomCode')
    store = _store()
    try:
        with store.lock:
            relay_message(store, _broadcast, room_code, _get_sid(), data.get('message'))
    except Exception:
        current_app.logger.exception(f"[sendMessage] failed room={room_code}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Event names and payload keys match the browser client (camelCase).
    """
    global _namespace
    _namespace = namespace
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('submitAnswer', handle_submit_answer, namespace=namespace)
    socketio.on_event('submitGuess', handle_submit_guess, namespace=namespace)
    socketio.on_event('sendMessage', handle_send_message, namespace=namespace)
