# backend/dashboard/guards.py
import logging
import threading
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class SubmitInProgress(Exception):
    """A save for the same record is already in flight."""


class InFlightGuard:
    """
    Process-wide set of keys with an outstanding save.
    A second ``hold()`` on a held key is rejected, never queued.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._keys = set()

    def is_held(self, key) -> bool:
        with self._lock:
            return key in self._keys

    @contextmanager
    def hold(self, key):
        with self._lock:
            if key in self._keys:
                logger.warning("Rejected duplicate submit for %s", key)
                raise SubmitInProgress("A save is already in progress")
            self._keys.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._keys.discard(key)


save_guard = InFlightGuard()
