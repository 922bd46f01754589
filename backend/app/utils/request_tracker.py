"""
Generation counters for per-view request tracking.

Each request for a view takes a new generation number; a response is only
current if no newer request for the same view has started since.
"""
import threading
from typing import Dict, Hashable


class RequestTracker:
    def __init__(self):
        self._lock = threading.Lock()
        self._latest: Dict[Hashable, int] = {}

    def begin(self, view_key: Hashable) -> int:
        """Start a request for `view_key` and return its generation."""
        with self._lock:
            generation = self._latest.get(view_key, 0) + 1
            self._latest[view_key] = generation
            return generation

    def is_current(self, view_key: Hashable, generation: int) -> bool:
        with self._lock:
            return self._latest.get(view_key) == generation

    def latest(self, view_key: Hashable) -> int:
        with self._lock:
            return self._latest.get(view_key, 0)


# Shared by the dashboard routes
dashboard_requests = RequestTracker()
