"""Store commands and the input-normalizing surface that builds them.

Raw UI events (typed text, toggle/remove clicks) go through
submit_new_task / request_toggle / request_remove before they reach
core.store.apply. Malformed input is rejected here with InvalidCommand;
blank text is dropped silently.
"""

from __future__ import annotations

import itertools
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Union

logger = logging.getLogger(__name__)


class InvalidCommand(ValueError):
    """Raised when a UI event cannot be turned into a valid command."""


# ── Commands ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Add:
    id: str
    text: str


@dataclass(frozen=True)
class Toggle:
    id: str


@dataclass(frozen=True)
class Remove:
    id: str


Command = Union[Add, Toggle, Remove]


# ── Identifiers ───────────────────────────────────────────────


ID_STRATEGIES = {"counter", "random"}


class IdGenerator:
    """Hands out task ids that never repeat for the generator's lifetime.

    counter: "1", "2", "3", ... (monotonic, deterministic)
    random:  uuid4 hex strings
    """

    def __init__(self, strategy: str = "counter", start: int = 1) -> None:
        if strategy not in ID_STRATEGIES:
            raise ValueError(f"Unknown id strategy: {strategy!r}")
        self.strategy = strategy
        self._counter = itertools.count(start)

    def __call__(self) -> str:
        if self.strategy == "random":
            return uuid.uuid4().hex
        return str(next(self._counter))


# ── Surface ───────────────────────────────────────────────────


def _check_id(task_id: Any) -> str:
    if not isinstance(task_id, str) or not task_id:
        raise InvalidCommand(f"Invalid task id: {task_id!r}")
    return task_id


def submit_new_task(raw_text: Any, new_id: Callable[[], str]) -> Add | None:
    """Normalize typed text into an Add command.

    Leading/trailing whitespace is trimmed. Returns None when nothing is
    left, so the caller simply skips the dispatch.
    """
    if not isinstance(raw_text, str):
        raise InvalidCommand(f"Task text must be a string, got {type(raw_text).__name__}")
    text = raw_text.strip()
    if not text:
        logger.debug("Discarded blank task input")
        return None
    return Add(id=_check_id(new_id()), text=text)


def request_toggle(task_id: Any) -> Toggle:
    return Toggle(id=_check_id(task_id))


def request_remove(task_id: Any) -> Remove:
    return Remove(id=_check_id(task_id))
