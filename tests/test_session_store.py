"""Tests for the session-owned override state and what-if toggling."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.school import SchoolRecord
from models.override import OverrideRequest
import data.session_store as store


@pytest.fixture
def session(monkeypatch):
    state = {}
    monkeypatch.setattr(store.st, "session_state", state)
    store.initialize_session_state()
    schools = [SchoolRecord("A", "A", "D1", "High", "Boys", 500, 600)]
    store.set_dataset(schools, [], [], "test")
    return state


class TestOverrideRequests:
    def test_apply_and_log(self, session):
        assert store.apply_override_request(OverrideRequest("A", 700))
        assert store.get_overrides().get("A") == 700
        entry = store.get_audit_log()[-1]
        assert entry.action == "set_capacity"
        assert entry.school_id == "A"
        assert entry.new_value == "700"

    def test_invalid_request_rejected(self, session):
        assert not store.apply_override_request(OverrideRequest("A", -1))
        assert not store.apply_override_request(OverrideRequest("UNKNOWN", 100))
        assert not store.get_overrides().is_active

    def test_reset(self, session):
        store.apply_override_request(OverrideRequest("A", 700))
        assert store.apply_override_request(OverrideRequest("A"))
        assert not store.get_overrides().is_active
        assert store.get_audit_log()[-1].action == "reset_capacity"

    def test_snapshot_replaced_wholesale(self, session):
        before = store.get_overrides()
        store.apply_override_request(OverrideRequest("A", 700))
        assert store.get_overrides() is not before
        assert not before.is_active


class TestWhatIfMode:
    def test_toggle_off_resets_all(self, session):
        store.set_what_if_mode(True)
        store.apply_override_request(OverrideRequest("A", 700))
        store.set_what_if_mode(False)
        assert not store.get_overrides().is_active
        assert store.get_audit_log()[-1].action == "reset_all"

    def test_new_dataset_drops_overrides(self, session):
        store.apply_override_request(OverrideRequest("A", 700))
        store.set_dataset(store.get_schools(), [], [], "reload")
        assert not store.get_overrides().is_active


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
