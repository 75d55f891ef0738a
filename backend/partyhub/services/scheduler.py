import threading
from typing import Callable, Dict, Hashable, Tuple


class AdvanceScheduler:
    """One-shot deferred callbacks keyed by ``(room_id, kind)``.

    Scheduling a key again replaces the pending task. Cancelled or replaced
    tasks are dropped when they wake. With ``autostart`` off (TESTING without
    ENABLE_SCHEDULER_IN_TESTS) tasks only run through :meth:`fire`.
    """

    def __init__(self, socketio, app, logger, lock=None, autostart=True):
        self.socketio = socketio
        self.app = app
        self.logger = logger
        self.lock = lock or threading.RLock()
        self.autostart = autostart
        self._tasks: Dict[Hashable, Tuple[object, Callable[[], None], float]] = {}

    def schedule(self, key, delay, callback):
        token = object()
        with self.lock:
            self._tasks[key] = (token, callback, delay)
        self.logger.info(f"[timer-set] key={key} delay={delay}s")
        if self.autostart:
            self.socketio.start_background_task(self._worker, key, token, delay)

    def _worker(self, key, token, delay):
        self.socketio.sleep(delay)
        with self.app.app_context():
            self._run(key, token)

    def _run(self, key, token):
        with self.lock:
            entry = self._tasks.get(key)
            if entry is None or entry[0] is not token:
                self.logger.info(f"[timer-abort] key={key} cancelled or replaced")
                return
            del self._tasks[key]
            self.logger.info(f"[timer-fire] key={key}")
            try:
                entry[1]()
            except Exception:
                self.logger.exception(f"[timer-error] key={key}")

    def fire(self, key):
        """Run a pending task now. Returns False if nothing was pending."""
        entry = self._tasks.get(key)
        if entry is None:
            return False
        self._run(key, entry[0])
        return True

    def cancel(self, key):
        with self.lock:
            if self._tasks.pop(key, None) is not None:
                self.logger.info(f"[timer-cancel] key={key}")

    def cancel_room(self, room_id):
        with self.lock:
            for key in [k for k in self._tasks if k[0] == room_id]:
                del self._tasks[key]
                self.logger.info(f"[timer-cancel] key={key}")

    def pending(self, key):
        return key in self._tasks

    def delay_of(self, key):
        entry = self._tasks.get(key)
        return entry[2] if entry else None
