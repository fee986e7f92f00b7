import logging
import time
from typing import List, Optional

from partnerquiz import socketio
from .store import RoomStore

logger = logging.getLogger(__name__)

DEFAULT_IDLE_TIMEOUT_SEC = 30 * 60


def reap_stale_rooms(store: RoomStore, now: Optional[float] = None,
                     idle_timeout: float = DEFAULT_IDLE_TIMEOUT_SEC) -> List[str]:
    """Delete rooms that are empty or idle for longer than ``idle_timeout``.

    Returns the codes of the deleted rooms.
    """
    now = time.time() if now is None else now
    reaped = []
    for room_code, session in store.items():
        if session.is_empty:
            reason = 'empty'
        elif now - session.last_activity > idle_timeout:
            reason = 'idle'
        else:
            continue
        store.delete(room_code)
        reaped.append(room_code)
        logger.info(f"[reap] room={room_code} reason={reason}")
    return reaped


def start_reaper(app, store: RoomStore) -> None:
    """Start the periodic stale room sweep as a Socket.IO background task.

    - No-ops in TESTING mode unless ENABLE_REAPER_IN_TESTS is set
    - No-ops when REAPER_INTERVAL_SEC is 0
    - Sweeps under the store lock so it never interleaves with an action
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_REAPER_IN_TESTS'):
        return
    interval = int(app.config.get('REAPER_INTERVAL_SEC', 300))
    idle_timeout = int(app.config.get('ROOM_IDLE_TIMEOUT_SEC', DEFAULT_IDLE_TIMEOUT_SEC))
    if interval <= 0:
        app.logger.info("[reaper] disabled (REAPER_INTERVAL_SEC=0)")
        return

    def _worker():
        while True:
            socketio.sleep(interval)
            try:
                with store.lock:
                    reaped = reap_stale_rooms(store, idle_timeout=idle_timeout)
                if reaped:
                    app.logger.info(f"[reaper] cleaned up {len(reaped)} stale room(s); {len(store)} active")
            except Exception:
                app.logger.exception("[reaper] sweep failed")

    app.logger.info(f"[reaper] every {interval}s, idle timeout {idle_timeout}s")
    socketio.start_background_task(_worker)
