"""Tests for core/session.py: the in-memory session used by both UIs."""

import logging

import pytest

from core.commands import Add, InvalidCommand, Toggle
from core.models import Filter, Task
from core.session import TaskSession


def test_starts_empty_with_all_filter(session):
    assert session.store == ()
    assert session.filter is Filter.ALL
    assert session.view.empty_message


def test_submit_trims_and_prepends(session):
    a = session.submit("  A  ")
    b = session.submit("B")
    assert a.text == "A"
    assert a.id != b.id
    assert [t.text for t in session.store] == ["B", "A"]


def test_submit_blank_changes_nothing(session):
    session.submit("A")
    before = session.store
    version = session.version
    assert session.submit("   ") is None
    assert session.store is before
    assert session.version == version


def test_submit_non_string(session):
    with pytest.raises(InvalidCommand):
        session.submit(None)
    assert session.store == ()


def test_toggle_and_remove(session):
    a = session.submit("A")
    assert session.toggle(a.id) is True
    assert session.store[0].done is True
    assert session.remove(a.id) is True
    assert session.store == ()


def test_missing_id_is_noop(session):
    session.submit("A")
    version = session.version
    assert session.toggle("ghost") is False
    assert session.remove("ghost") is False
    assert session.version == version


def test_dispatch_bumps_version_only_on_change(session):
    a = session.submit("A")
    assert session.version == 1
    session.dispatch(Toggle(id=a.id))
    assert session.version == 2
    session.dispatch(Toggle(id="ghost"))
    assert session.version == 2


def test_end_to_end(session):
    a = session.submit("A")
    session.submit("B")
    session.toggle(a.id)

    session.set_filter("completed")
    assert [t.text for t in session.view.filtered_tasks] == ["A"]
    session.set_filter(Filter.ACTIVE)
    view = session.view
    assert [t.text for t in view.filtered_tasks] == ["B"]
    assert view.remaining_count == 1
    assert view.completed_count == 1


def test_view_is_memoized_until_change(session):
    session.submit("A")
    first = session.view
    assert session.view is first
    session.set_filter("active")
    second = session.view
    assert second is not first
    session.submit("B")
    assert session.view is not second
    assert len(session.view.filtered_tasks) == 2


def test_set_filter_invalid(session):
    with pytest.raises(ValueError):
        session.set_filter("someday")
    assert session.filter is Filter.ALL


def test_filter_transitions_unrestricted(session):
    for a in Filter:
        for b in Filter:
            session.set_filter(a)
            assert session.set_filter(b) is b


def test_initial_filter_and_random_ids():
    s = TaskSession(id_strategy="random", initial_filter="completed")
    assert s.filter is Filter.COMPLETED
    t = s.submit("x")
    assert len(t.id) == 32


def test_mutations_are_logged(session, caplog):
    with caplog.at_level(logging.DEBUG, logger="core.session"):
        t = session.submit("A")
        session.toggle("ghost")
    assert any(t.id in r.getMessage() for r in caplog.records)
    assert any("No-op" in r.getMessage() for r in caplog.records)


def test_seeded_store_ids_stay_unique():
    s = TaskSession(store=(Task(id="1", text="seed"), Task(id="note", text="other")))
    t = s.submit("new")
    assert t.id not in {"1", "note"}
    s.toggle(t.id)
    ids = [x.id for x in s.store]
    assert len(set(ids)) == len(s.store)
    assert [x.done for x in s.store] == [True, False, False]


def test_seeded_counter_starts_past_largest_numeric_id():
    s = TaskSession(store=(Task(id="7", text="a"), Task(id="3", text="b")))
    assert s.submit("c").id == "8"


def test_dispatched_add_id_is_not_reissued(session):
    session.dispatch(Add(id="1", text="external"))
    t = session.submit("mine")
    assert t.id != "1"


def test_removed_id_is_not_reissued(session):
    a = session.submit("A")
    session.remove(a.id)
    assert session.submit("B").id != a.id
