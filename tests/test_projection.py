"""Tests for core/projection.py: filtered view, counts, cache."""

from core.commands import Add, Toggle
from core.models import EMPTY_STORE, Filter, Task
from core.projection import EMPTY_MESSAGES, ProjectionCache, project
from core.store import apply, apply_all


def test_project_all_keeps_order(store):
    view = project(store, "all")
    assert view.filtered_tasks == store
    assert view.filter is Filter.ALL


def test_project_active_and_completed(store):
    assert [t.id for t in project(store, "active").filtered_tasks] == ["3", "1"]
    assert [t.id for t in project(store, "completed").filtered_tasks] == ["2"]


def test_counts_ignore_filter(store):
    for flt in Filter:
        view = project(store, flt)
        assert view.remaining_count == 2
        assert view.completed_count == 1
        assert view.total_count == 3


def test_completed_and_active_partition_store(store):
    done = project(store, "completed").filtered_tasks
    active = project(store, "active").filtered_tasks
    assert len(done) + len(active) == len(project(store, "all").filtered_tasks)
    for t in store:
        assert (t in done) != (t in active)


def test_progress_pct(store):
    assert project(store).progress_pct == 33.3
    assert project(EMPTY_STORE).progress_pct == 0.0
    all_done = tuple(Task(id=t.id, text=t.text, done=True) for t in store)
    assert project(all_done).progress_pct == 100.0


def test_empty_message_per_filter():
    for flt in Filter:
        assert project(EMPTY_STORE, flt).empty_message == EMPTY_MESSAGES[flt]


def test_empty_message_only_when_filtered_empty():
    s = (Task(id="1", text="a"),)
    assert project(s, "all").empty_message == ""
    assert project(s, "completed").empty_message == EMPTY_MESSAGES[Filter.COMPLETED]


def test_end_to_end_scenario():
    s = apply_all(EMPTY_STORE, [Add(id="a", text="A"), Add(id="b", text="B")])
    assert [t.text for t in s] == ["B", "A"]

    s = apply(s, Toggle(id="a"))
    completed = project(s, "completed")
    active = project(s, "active")
    assert [t.text for t in completed.filtered_tasks] == ["A"]
    assert [t.text for t in active.filtered_tasks] == ["B"]
    assert completed.remaining_count == 1
    assert completed.completed_count == 1


def test_cache_hits_for_same_store_and_filter(store):
    cache = ProjectionCache()
    first = cache.get(store, "active", version=1)
    second = cache.get(store, Filter.ACTIVE, version=1)
    assert first is second
    assert cache.hits == 1
    assert cache.misses == 1


def test_cache_recomputes_on_filter_change(store):
    cache = ProjectionCache()
    cache.get(store, "active")
    view = cache.get(store, "completed")
    assert cache.misses == 2
    assert view == project(store, "completed")


def test_cache_recomputes_on_new_store(store):
    cache = ProjectionCache()
    cache.get(store, "all", version=1)
    new_store = apply(store, Toggle(id="1"))
    view = cache.get(new_store, "all", version=2)
    assert cache.misses == 2
    assert view == project(new_store, "all")
    assert view.completed_count == 2


def test_cache_matches_fresh_projection(store):
    cache = ProjectionCache()
    for flt in ["all", "active", "all", "completed", "completed"]:
        assert cache.get(store, flt) == project(store, flt)
