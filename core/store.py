"""Pure transition function over the task store.

apply() never mutates its input: every command returns a new tuple (or
the same tuple when the command does not match anything).
"""

from __future__ import annotations

from typing import Iterable

from core.commands import Add, Command, Remove, Toggle
from core.models import Task, TaskStore


def apply(store: TaskStore, command: Command) -> TaskStore:
    """Return the store that results from applying *command* to *store*.

    - Add: new task, not done, at the head
    - Toggle: flip done on the matching task, order kept
    - Remove: drop the matching task

    Toggle/Remove with an unknown id hand back *store* unchanged.
    """
    if isinstance(command, Add):
        return (Task(id=command.id, text=command.text, done=False),) + store

    if isinstance(command, Toggle):
        if find_task(store, command.id) is None:
            return store
        return tuple(
            Task(id=t.id, text=t.text, done=not t.done) if t.id == command.id else t
            for t in store
        )

    if isinstance(command, Remove):
        if find_task(store, command.id) is None:
            return store
        return tuple(t for t in store if t.id != command.id)

    raise TypeError(f"Unknown command: {command!r}")


def apply_all(store: TaskStore, commands: Iterable[Command]) -> TaskStore:
    for command in commands:
        store = apply(store, command)
    return store


def find_task(store: TaskStore, task_id: str) -> Task | None:
    """Find a task by ID."""
    for t in store:
        if t.id == task_id:
            return t
    return None
