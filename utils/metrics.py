from __future__ import annotations

import threading


class HitCounter:
    """
    Thread-safe request counter owned by the application.
    One instance lives in app.extensions["hit_counter"].
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0
