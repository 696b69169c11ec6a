"""Derived read model: filtered list, counts, progress."""

from __future__ import annotations

from core.models import Filter, TaskStore, TaskView


EMPTY_MESSAGES = {
    Filter.ALL: "Start by adding your first task!",
    Filter.ACTIVE: "No pending tasks!",
    Filter.COMPLETED: "You haven't completed any tasks yet!",
}


def project(store: TaskStore, filter: Filter | str = Filter.ALL) -> TaskView:
    """Compute the view of *store* under *filter*.

    Filtering keeps stored order. Counts always cover the whole store,
    whatever the filter.
    """
    flt = Filter.parse(filter)
    remaining = sum(1 for t in store if not t.done)
    completed = len(store) - remaining

    if flt is Filter.ALL:
        filtered = store
    else:
        filtered = tuple(t for t in store if flt.includes(t))

    progress = round(completed / len(store) * 100, 1) if store else 0.0

    return TaskView(
        filter=flt,
        filtered_tasks=filtered,
        remaining_count=remaining,
        completed_count=completed,
        progress_pct=progress,
        empty_message="" if filtered else EMPTY_MESSAGES[flt],
    )


class ProjectionCache:
    """Memoizes project() keyed by (store version, filter).

    The version is the identity of the store tuple plus a counter the
    owner bumps on every replacement. Any change to either recomputes.
    """

    def __init__(self) -> None:
        self._key: tuple[int, int, Filter] | None = None
        self._store: TaskStore | None = None
        self._view: TaskView | None = None
        self.hits = 0
        self.misses = 0

    def get(self, store: TaskStore, filter: Filter | str, version: int = 0) -> TaskView:
        flt = Filter.parse(filter)
        key = (id(store), version, flt)
        if self._view is not None and self._key == key and self._store is store:
            self.hits += 1
            return self._view
        self.misses += 1
        self._view = project(store, flt)
        self._key = key
        # Held so id(store) cannot be recycled by a different tuple.
        self._store = store
        return self._view
