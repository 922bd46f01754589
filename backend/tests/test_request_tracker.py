"""
Unit tests for per-view request generations.
"""
from app.utils.request_tracker import RequestTracker


class TestRequestTracker:

    def test_latest_request_is_current(self):
        tracker = RequestTracker()
        first = tracker.begin("dashboard")
        second = tracker.begin("dashboard")
        assert second == first + 1
        assert not tracker.is_current("dashboard", first)
        assert tracker.is_current("dashboard", second)

    def test_views_are_independent(self):
        tracker = RequestTracker()
        a = tracker.begin(("user-1", "dashboard"))
        tracker.begin(("user-2", "dashboard"))
        assert tracker.is_current(("user-1", "dashboard"), a)
        assert tracker.latest(("user-3", "dashboard")) == 0
