"""Typed dataclasses for the TaskFlow data model.

Tasks are frozen: a toggle produces a new record, it never edits one.
to_dict maps to the JSON shape served by the web UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


# ── Tasks ─────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    done: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "done": self.done}


# Newest task first.
TaskStore = tuple[Task, ...]

EMPTY_STORE: TaskStore = ()


# ── Filter ────────────────────────────────────────────────────


class Filter(StrEnum):
    """Which tasks a view shows. Selecting one never touches the store."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: Filter | str) -> Filter:
        """Accept a Filter or its value, e.g. ' Active ' -> Filter.ACTIVE."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            raise ValueError(f"Invalid filter: {raw!r}")
        try:
            return cls(raw.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid filter: {raw!r}") from None

    def includes(self, task: Task) -> bool:
        if self is Filter.ACTIVE:
            return not task.done
        if self is Filter.COMPLETED:
            return task.done
        return True


@dataclass(frozen=True)
class FilterOption:
    key: Filter
    label: str
    icon: str

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key.value, "label": self.label, "icon": self.icon}


FILTER_OPTIONS: tuple[FilterOption, ...] = (
    FilterOption(Filter.ALL, "All", "✨"),
    FilterOption(Filter.ACTIVE, "Active", "○"),
    FilterOption(Filter.COMPLETED, "Done", "●"),
)


# ── Derived view ──────────────────────────────────────────────


@dataclass(frozen=True)
class TaskView:
    """Read model computed from (store, filter). Never stored."""

    filter: Filter = Filter.ALL
    filtered_tasks: TaskStore = field(default_factory=tuple)
    remaining_count: int = 0
    completed_count: int = 0
    progress_pct: float = 0.0
    empty_message: str = ""

    @property
    def total_count(self) -> int:
        return self.remaining_count + self.completed_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "filter": self.filter.value,
            "tasks": [t.to_dict() for t in self.filtered_tasks],
            "remaining": self.remaining_count,
            "completed": self.completed_count,
            "total": self.total_count,
            "progressPct": self.progress_pct,
            "emptyMessage": self.empty_message,
        }
