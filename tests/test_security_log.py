"""
Tests for the bounded security log
"""

import pytest

from jarvis.security_log import SecurityLog


def test_append_assigns_id_and_timestamp():
    log = SecurityLog()
    entry = log.append("Door opened", "info", "front_door")

    assert entry.id
    assert entry.timestamp.endswith("Z")
    assert entry.event == "Door opened"
    assert entry.severity == "info"
    assert entry.source == "front_door"


def test_newest_entry_first():
    log = SecurityLog()
    log.append("first", "info", "test")
    log.append("second", "info", "test")

    assert [e.event for e in log.entries()] == ["second", "first"]


def test_size_never_exceeds_limit():
    """After the 101st append the oldest entry is gone and the newest leads"""
    log = SecurityLog(limit=100)
    for i in range(101):
        log.append(f"event {i}", "info", "test")

    entries = log.entries()
    assert len(log) == 100
    assert entries[0].event == "event 100"
    assert "event 0" not in {e.event for e in entries}
    assert entries[-1].event == "event 1"


def test_ids_unique_across_overflow():
    log = SecurityLog(limit=5)
    ids = [log.append(f"e{i}", "info", "test").id for i in range(20)]
    assert len(set(ids)) == 20


def test_recent_by_severity_filters_and_limits():
    log = SecurityLog()
    log.append("a", "alert", "test")
    log.append("b", "info", "test")
    log.append("c", "critical", "test")
    log.append("d", "warning", "test")
    log.append("e", "alert", "test")

    recent = log.recent_by_severity({"alert", "critical"}, 2)

    assert [e.event for e in recent] == ["e", "c"]
    assert log.recent_by_severity({"alert"}, 0) == []


def test_entries_limit():
    log = SecurityLog()
    for i in range(10):
        log.append(f"e{i}", "info", "test")
    assert [e.event for e in log.entries(3)] == ["e9", "e8", "e7"]


def test_entries_are_immutable():
    log = SecurityLog()
    entry = log.append("x", "info", "test")
    with pytest.raises(Exception):
        entry.event = "changed"


def test_limit_must_be_positive():
    with pytest.raises(ValueError):
        SecurityLog(limit=0)
