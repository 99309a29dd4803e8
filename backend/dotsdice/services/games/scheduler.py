import time
from typing import Set

from dotsdice import socketio


_scheduled_evictions: Set[str] = set()


def schedule_room_eviction(app, code: str) -> None:
    """Drop a finished room once its TTL has passed.

    - No-ops in TESTING mode unless ENABLE_SCHEDULER_IN_TESTS is set
    - Ensures a single pending timer per room code
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return

    registry = app.extensions['room_registry']
    delay = registry.finished_ttl
    if code in _scheduled_evictions:
        app.logger.info(f"[evict-skip] room={code} already scheduled")
        return
    _scheduled_evictions.add(code)
    app.logger.info(f"[evict-set] room={code} ttl={delay}s")

    def _worker(room_code: str, wait: float):
        time.sleep(wait)
        _scheduled_evictions.discard(room_code)
        removed = registry.evict_finished()
        app.logger.info(f"[evict-fire] room={room_code} removed={','.join(removed) or '-'}")

    socketio.start_background_task(_worker, code, delay)
