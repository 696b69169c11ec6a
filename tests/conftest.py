"""Shared test fixtures for TaskFlow tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from core.models import Task
from core.session import TaskSession


@pytest.fixture
def store() -> tuple[Task, ...]:
    """Three tasks, newest first, middle one done."""
    return (
        Task(id="3", text="Write report"),
        Task(id="2", text="Review PR", done=True),
        Task(id="1", text="Buy milk"),
    )


@pytest.fixture
def session() -> TaskSession:
    return TaskSession()


@pytest.fixture
def clean_env(monkeypatch):
    """Drop any TASKFLOW_* variables inherited from the shell."""
    for name in list(os.environ):
        if name.startswith("TASKFLOW_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def settings_file(tmp_path: Path, clean_env) -> Path:
    """Write a settings.yaml and point TASKFLOW_CONFIG at it."""
    path = tmp_path / "taskflow" / "settings.yaml"
    path.parent.mkdir(parents=True)
    settings = {
        "id_strategy": "random",
        "initial_filter": "active",
        "log_level": "debug",
        "log_file": str(tmp_path / "logs" / "taskflow.log"),
        "web": {
            "username": "alice",
            "password": "s3cret",
            "host": "0.0.0.0",
            "port": 9000,
        },
    }
    path.write_text(yaml.dump(settings, default_flow_style=False), encoding="utf-8")
    clean_env.setenv("TASKFLOW_CONFIG", str(path))
    return path
