"""In-memory task session shared by the terminal and web UIs.

Holds the current store value and filter, feeds UI events through the
command surface into the store, and serves a memoized view.
"""

from __future__ import annotations

import logging

from core.commands import (
    Add,
    Command,
    IdGenerator,
    request_remove,
    request_toggle,
    submit_new_task,
)
from core.models import EMPTY_STORE, Filter, Task, TaskStore, TaskView
from core.projection import ProjectionCache
from core.store import apply

logger = logging.getLogger(__name__)


class TaskSession:
    def __init__(
        self,
        id_strategy: str = "counter",
        initial_filter: Filter | str = Filter.ALL,
        store: TaskStore = EMPTY_STORE,
    ) -> None:
        self._store: TaskStore = tuple(store)
        self._filter = Filter.parse(initial_filter)
        self._version = 0
        # Ids handed out or seeded so far; never reused, even after a Remove.
        self._used_ids = {t.id for t in self._store}
        numeric = [int(i) for i in self._used_ids if i.isdecimal()]
        self._new_id = IdGenerator(id_strategy, start=max(numeric, default=0) + 1)
        self._cache = ProjectionCache()

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def filter(self) -> Filter:
        return self._filter

    @property
    def version(self) -> int:
        return self._version

    @property
    def view(self) -> TaskView:
        return self._cache.get(self._store, self._filter, self._version)

    def _fresh_id(self) -> str:
        task_id = self._new_id()
        while task_id in self._used_ids:
            task_id = self._new_id()
        self._used_ids.add(task_id)
        return task_id

    # ── Commands ──────────────────────────────────────────────

    def dispatch(self, command: Command) -> bool:
        """Apply *command*; return True if the store changed."""
        new_store = apply(self._store, command)
        if new_store is self._store:
            logger.debug("No-op %r", command)
            return False
        if isinstance(command, Add):
            self._used_ids.add(command.id)
        self._store = new_store
        self._version += 1
        logger.debug("Applied %r (version %d, %d tasks)", command, self._version, len(new_store))
        return True

    def submit(self, raw_text: str) -> Task | None:
        """Add a task from raw input. Returns None if the input was blank."""
        command = submit_new_task(raw_text, self._fresh_id)
        if command is None:
            return None
        self.dispatch(command)
        return self._store[0]

    def toggle(self, task_id: str) -> bool:
        return self.dispatch(request_toggle(task_id))

    def remove(self, task_id: str) -> bool:
        return self.dispatch(request_remove(task_id))

    def set_filter(self, value: Filter | str) -> Filter:
        self._filter = Filter.parse(value)
        return self._filter
