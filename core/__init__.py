"""TaskFlow core library: task store, command surface, view projector.

Public API re-exports for convenient imports:
    from core import TaskSession, apply, project, submit_new_task, ...
"""

# Models
from core.models import (
    EMPTY_STORE,
    FILTER_OPTIONS,
    Filter,
    FilterOption,
    Task,
    TaskStore,
    TaskView,
)

# Command surface
from core.commands import (
    Add,
    Command,
    IdGenerator,
    InvalidCommand,
    Remove,
    Toggle,
    request_remove,
    request_toggle,
    submit_new_task,
)

# Store
from core.store import (
    apply,
    apply_all,
    find_task,
)

# Projection
from core.projection import (
    EMPTY_MESSAGES,
    ProjectionCache,
    project,
)

# Session
from core.session import TaskSession

# Settings & logging
from core.config import (
    Settings,
    config_path,
    load_settings,
    validate_settings,
)
from core.logging_setup import setup_logging
