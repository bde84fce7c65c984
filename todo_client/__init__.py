"""Todo Client - a terminal todo list backed by a REST task service.

- Fetches a short list of tasks from the service
- Adds new tasks and toggles their completion
- Keeps all UI state in a single StateStore updated by named transitions
"""

__version__ = "1.0.0"

from .models import Task
from .service import NetworkError, TaskServiceClient
from .state import (
    AppState,
    BeginLoad,
    LoadFailed,
    LoadSucceeded,
    StateStore,
    TaskAdded,
    TaskUpdated,
    reduce,
)
from .controller import TodoController
from .view import Screen, TodoView

__all__ = [
    # Model
    "Task",
    # Service
    "NetworkError",
    "TaskServiceClient",
    # State
    "AppState",
    "BeginLoad",
    "LoadFailed",
    "LoadSucceeded",
    "StateStore",
    "TaskAdded",
    "TaskUpdated",
    "reduce",
    # Coordination and rendering
    "TodoController",
    "Screen",
    "TodoView",
]
