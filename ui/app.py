from __future__ import annotations

import logging
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from core import (
    FILTER_OPTIONS,
    Filter,
    InvalidCommand,
    Settings,
    TaskSession,
    TaskView,
    load_settings,
    project,
    setup_logging,
)

logger = logging.getLogger(__name__)


# ── Session ───────────────────────────────────────────────────

_settings: Settings | None = None
_session: TaskSession | None = None


def reset_session(settings: Settings | None = None) -> tuple[Settings, TaskSession]:
    """Replace the in-memory session (and settings) with a fresh one."""
    global _settings, _session
    _settings = settings if settings is not None else load_settings()
    _session = TaskSession(
        id_strategy=_settings.id_strategy,
        initial_filter=_settings.initial_filter,
    )
    return _settings, _session


def get_session() -> TaskSession:
    if _session is None:
        return reset_session()[1]
    return _session


def get_settings() -> Settings:
    if _settings is None:
        return reset_session()[0]
    return _settings


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _parse_filter(raw: str) -> Filter:
    try:
        return Filter.parse(raw)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _render_page(view: TaskView) -> str:
    filter_links = []
    for opt in FILTER_OPTIONS:
        cls = "filter selected" if opt.key is view.filter else "filter"
        filter_links.append(
            f'<a class="{cls}" href="/?filter={opt.key.value}">{opt.icon} {_escape(opt.label)}</a>'
        )

    rows = []
    for t in view.filtered_tasks:
        tid = _escape(t.id)
        rows.append(
            f"""
            <div class="todo{' done' if t.done else ''}">
              <form method="post" action="/toggle/{tid}">
                <button class="check" type="submit">{'☑' if t.done else '☐'}</button>
              </form>
              <span class="text">{_escape(t.text)}</span>
              <form method="post" action="/remove/{tid}">
                <button class="remove" type="submit">✕</button>
              </form>
            </div>
            """
        )
    if not rows:
        rows.append(f'<p class="muted">{_escape(view.empty_message)}</p>')

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>TaskFlow</title>
  <style>
    body {{ font-family: system-ui, sans-serif; max-width: 36rem; margin: 2rem auto; }}
    .filter {{ margin-right: 1rem; }}
    .filter.selected {{ font-weight: bold; }}
    .todo {{ display: flex; gap: .5rem; align-items: center; }}
    .todo .text {{ flex: 1; }}
    .todo.done .text {{ text-decoration: line-through; opacity: .6; }}
    .todo form {{ margin: 0; }}
    .muted {{ color: #888; }}
    .bar {{ background: #eee; height: .5rem; border-radius: .25rem; }}
    .bar div {{ background: #8b5cf6; height: 100%; border-radius: .25rem; }}
  </style>
</head>
<body>
  <h1>TaskFlow</h1>
  <form method="post" action="/add">
    <input name="text" placeholder="What do you want to get done today?" autofocus />
    <button type="submit">+</button>
  </form>
  <nav>{''.join(filter_links)}</nav>
  <section>{''.join(rows)}</section>
  <footer>
    <p>Pending: <b>{view.remaining_count}</b> &middot; Completed: <b>{view.completed_count}</b></p>
    <div class="bar"><div style="width: {view.progress_pct}%"></div></div>
  </footer>
</body>
</html>
"""


# ── Auth ──────────────────────────────────────────────────────

app = FastAPI(title="TaskFlow UI", version="0.1.0")

security = HTTPBasic(auto_error=False)


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    settings = get_settings()
    expected_username = settings.web_username
    expected_password = settings.web_password

    if not settings.auth_enabled:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Pages ─────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(filter: str | None = None, username: str = Depends(get_current_user)) -> HTMLResponse:
    session = get_session()
    if filter is not None:
        session.set_filter(_parse_filter(filter))
    return HTMLResponse(_render_page(session.view))


@app.post("/add")
def add_form(text: str = Form(""), username: str = Depends(get_current_user)) -> RedirectResponse:
    get_session().submit(text)
    return RedirectResponse(url="/", status_code=303)


@app.post("/toggle/{task_id}")
def toggle_form(task_id: str, username: str = Depends(get_current_user)) -> RedirectResponse:
    get_session().toggle(task_id)
    return RedirectResponse(url="/", status_code=303)


@app.post("/remove/{task_id}")
def remove_form(task_id: str, username: str = Depends(get_current_user)) -> RedirectResponse:
    get_session().remove(task_id)
    return RedirectResponse(url="/", status_code=303)


# ── JSON API ──────────────────────────────────────────────────

@app.get("/api/filters")
def api_filters(username: str = Depends(get_current_user)) -> dict[str, Any]:
    session = get_session()
    return {
        "current": session.filter.value,
        "options": [opt.to_dict() for opt in FILTER_OPTIONS],
    }


@app.get("/api/tasks")
def api_list_tasks(filter: str | None = None, username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Projected view; ?filter= overrides the session filter for this call only."""
    session = get_session()
    if filter is None:
        return session.view.to_dict()
    flt = _parse_filter(filter)
    if flt is session.filter:
        return session.view.to_dict()
    return project(session.store, flt).to_dict()


@app.post("/api/tasks")
def api_create_task(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Create a new task from raw text."""
    try:
        task = get_session().submit(payload.get("text"))
    except InvalidCommand as e:
        raise HTTPException(status_code=400, detail=str(e))
    if task is None:
        return {"ok": False, "reason": "empty-text"}
    logger.info("Task added: %s", task.id)
    return {"ok": True, "task": task.to_dict()}


@app.post("/api/tasks/{task_id}/toggle")
def api_toggle_task(task_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    session = get_session()
    changed = session.toggle(task_id)
    return {"ok": True, "changed": changed, "view": session.view.to_dict()}


@app.delete("/api/tasks/{task_id}")
def api_delete_task(task_id: str, username: str = Depends(get_current_user)) -> dict[str, Any]:
    session = get_session()
    changed = session.remove(task_id)
    if changed:
        logger.info("Task removed: %s", task_id)
    return {"ok": True, "changed": changed, "view": session.view.to_dict()}


@app.post("/api/filter")
def api_set_filter(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    session = get_session()
    raw = payload.get("filter")
    if not isinstance(raw, str):
        raise HTTPException(status_code=400, detail="Missing filter")
    session.set_filter(_parse_filter(raw))
    return session.view.to_dict()


# ── Entry point ───────────────────────────────────────────────

def main() -> None:
    import uvicorn

    settings = load_settings()
    setup_logging(settings.log_level_no, settings.log_file)
    reset_session(settings)
    logger.info("Starting TaskFlow web UI on %s:%d", settings.web_host, settings.web_port)
    uvicorn.run(app, host=settings.web_host, port=settings.web_port)


if __name__ == "__main__":
    main()
