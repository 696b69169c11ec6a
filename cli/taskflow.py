#!/usr/bin/env python3
"""TaskFlow TUI: interactive terminal task list powered by Textual."""

from __future__ import annotations

import logging
import sys

from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.logging import TextualHandler
from textual.widgets import (
    Button,
    Checkbox,
    Footer,
    Header,
    Input,
    Label,
    Static,
)

from core import (
    FILTER_OPTIONS,
    Filter,
    InvalidCommand,
    Settings,
    Task,
    TaskSession,
    load_settings,
    setup_logging,
)

logger = logging.getLogger(__name__)


# ── Stylesheet ─────────────────────────────────────────────────

CSS = """
Screen {
    background: $surface;
}

#main-layout {
    height: 1fr;
    padding: 0 2;
}

#new-task {
    margin: 1 0;
}

#filter-bar {
    height: auto;
    margin: 0 0 1 0;
}

#filter-bar Button {
    margin: 0 1 0 0;
}

#filter-bar Button.-selected {
    text-style: bold;
}

#task-list {
    height: 1fr;
}

.task-row {
    height: auto;
}

.task-row Checkbox {
    width: 1fr;
}

.task-row Button {
    min-width: 5;
}

.task-done {
    opacity: 50%;
}

.task-done Checkbox {
    text-style: strike;
}

#empty-message {
    color: $text-muted;
    padding: 1 2;
}

#stats {
    dock: bottom;
    height: 1;
    background: $primary-background;
    color: $text-muted;
    padding: 0 2;
}

.section-title {
    text-style: bold;
    color: $text;
    margin: 1 0 0 0;
}
"""


# ── Custom widgets ─────────────────────────────────────────────


class TaskRow(Horizontal):
    """A single task: checkbox + remove button."""

    def __init__(self, task: Task, **kwargs) -> None:
        super().__init__(**kwargs)
        self.task_id = task.id
        self.task_text = task.text
        self.task_done = task.done

    def compose(self) -> ComposeResult:
        yield Checkbox(Text(self.task_text), value=self.task_done)
        yield Button("✕", variant="error", classes="remove-button")

    def on_mount(self) -> None:
        self.add_class("task-row")
        if self.task_done:
            self.add_class("task-done")


# ── Main app ───────────────────────────────────────────────────


class TaskFlowApp(App):
    """TaskFlow: organize your world, one task at a time."""

    TITLE = "TaskFlow"
    CSS = CSS

    BINDINGS = [
        Binding("f1", "set_filter('all')", "All"),
        Binding("f2", "set_filter('active')", "Active"),
        Binding("f3", "set_filter('completed')", "Done"),
        Binding("escape", "blur_focus", "Back"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.session = TaskSession(
            id_strategy=self.settings.id_strategy,
            initial_filter=self.settings.initial_filter,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        yield Vertical(
            Input(placeholder="What do you want to get done today?", id="new-task"),
            Horizontal(
                *[
                    Button(f"{opt.icon} {opt.label}", id=f"filter-{opt.key.value}", classes="filter-button")
                    for opt in FILTER_OPTIONS
                ],
                id="filter-bar",
            ),
            Label("Tasks", classes="section-title"),
            VerticalScroll(id="task-list"),
            Static(id="empty-message"),
            id="main-layout",
        )
        yield Static(id="stats")
        yield Footer()

    async def on_mount(self) -> None:
        self.query_one("#new-task", Input).focus()
        await self._refresh_view()

    async def _refresh_view(self) -> None:
        """(Re)build the task rows, filter bar and stats from the session view."""
        view = self.session.view

        task_list = self.query_one("#task-list", VerticalScroll)
        await task_list.remove_children()
        await task_list.mount_all([TaskRow(t) for t in view.filtered_tasks])

        for opt in FILTER_OPTIONS:
            button = self.query_one(f"#filter-{opt.key.value}", Button)
            button.set_class(opt.key is view.filter, "-selected")

        self.query_one("#empty-message", Static).update(view.empty_message)
        self.query_one("#stats", Static).update(
            f"Pending: {view.remaining_count}   "
            f"Completed: {view.completed_count}   "
            f"Progress: {view.progress_pct:.0f}%"
        )
        self.sub_title = f"[{view.filter.value.upper()}]"

    # ── Events ─────────────────────────────────────────────────

    @on(Input.Submitted, "#new-task")
    async def _on_new_task(self, event: Input.Submitted) -> None:
        try:
            task = self.session.submit(event.value)
        except InvalidCommand as e:
            self.notify(str(e), title="Invalid input", severity="error")
            return
        if task is None:
            return
        event.input.value = ""
        await self._refresh_view()

    @on(Checkbox.Changed)
    async def _on_checkbox_toggle(self, event: Checkbox.Changed) -> None:
        row = event.checkbox.parent
        if not isinstance(row, TaskRow) or event.value == row.task_done:
            return
        self.session.toggle(row.task_id)
        await self._refresh_view()

    @on(Button.Pressed, ".remove-button")
    async def _on_remove(self, event: Button.Pressed) -> None:
        row = event.button.parent
        if not isinstance(row, TaskRow):
            return
        self.session.remove(row.task_id)
        await self._refresh_view()

    @on(Button.Pressed, ".filter-button")
    async def _on_filter_button(self, event: Button.Pressed) -> None:
        key = (event.button.id or "").removeprefix("filter-")
        await self.action_set_filter(key)

    # ── Actions ────────────────────────────────────────────────

    async def action_set_filter(self, key: str) -> None:
        self.session.set_filter(Filter.parse(key))
        await self._refresh_view()

    def action_blur_focus(self) -> None:
        self.set_focus(None)


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Invalid settings: {e}")
        sys.exit(1)

    setup_logging(settings.log_level_no, settings.log_file, console_handler=TextualHandler())
    logger.info("Starting TaskFlow TUI (id strategy: %s)", settings.id_strategy)

    app = TaskFlowApp(settings)
    app.run()


if __name__ == "__main__":
    main()
