"""Application state and its transitions.

The state is a frozen snapshot that only changes through five transitions:
- BeginLoad: a list fetch started
- LoadSucceeded: the list fetch returned tasks
- LoadFailed: any network call failed
- TaskAdded: the service created a task
- TaskUpdated: the service returned a changed task

``reduce`` folds a transition into a snapshot without side effects.
``StateStore`` owns the current snapshot and notifies listeners.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, List, Optional, Tuple, Union

from .models import Task


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppState:
    """Snapshot of everything the view needs to draw."""

    tasks: Tuple[Task, ...] = ()
    loading: bool = True
    error: Optional[str] = None

    def find_task(self, task_id: int) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


@dataclass(frozen=True)
class BeginLoad:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    tasks: Tuple[Task, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LoadFailed:
    message: str


@dataclass(frozen=True)
class TaskAdded:
    task: Task


@dataclass(frozen=True)
class TaskUpdated:
    task: Task


Transition = Union[BeginLoad, LoadSucceeded, LoadFailed, TaskAdded, TaskUpdated]

Listener = Callable[[AppState, Transition], None]


def reduce(
    state: AppState,
    transition: Transition,
    clear_stale_error: bool = False,
) -> AppState:
    """Return the state that results from applying ``transition``.

    Args:
        state: Current snapshot.
        transition: One of the five transition variants.
        clear_stale_error: Reset ``error`` when a list fetch succeeds.

    Raises:
        TypeError: If ``transition`` is not a known variant.
    """
    if isinstance(transition, BeginLoad):
        return replace(state, loading=True)

    if isinstance(transition, LoadSucceeded):
        if clear_stale_error:
            return replace(state, tasks=tuple(transition.tasks), loading=False, error=None)
        return replace(state, tasks=tuple(transition.tasks), loading=False)

    if isinstance(transition, LoadFailed):
        return replace(state, error=transition.message, loading=False)

    if isinstance(transition, TaskAdded):
        return replace(state, tasks=(transition.task,) + state.tasks)

    if isinstance(transition, TaskUpdated):
        updated = transition.task
        return replace(
            state,
            tasks=tuple(updated if t.id == updated.id else t for t in state.tasks),
        )

    raise TypeError(f"Unknown transition: {transition!r}")


class StateStore:
    """Holds the current AppState; the only place it is replaced."""

    def __init__(
        self,
        initial: Optional[AppState] = None,
        clear_stale_error: bool = False,
    ):
        self._state = initial if initial is not None else AppState()
        self.clear_stale_error = clear_stale_error
        self._listeners: List[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, transition: Transition) -> AppState:
        """Apply a transition and notify listeners with the new state."""
        self._state = reduce(self._state, transition, self.clear_stale_error)
        logger.debug("Applied %s -> %d task(s), loading=%s, error=%r",
                     type(transition).__name__, len(self._state.tasks),
                     self._state.loading, self._state.error)

        for listener in list(self._listeners):
            listener(self._state, transition)

        return self._state

    # --- Named transitions ---

    def begin_load(self) -> AppState:
        return self.dispatch(BeginLoad())

    def load_succeeded(self, tasks: Iterable[Task]) -> AppState:
        return self.dispatch(LoadSucceeded(tuple(tasks)))

    def load_failed(self, message: str) -> AppState:
        return self.dispatch(LoadFailed(message))

    def task_added(self, task: Task) -> AppState:
        return self.dispatch(TaskAdded(task))

    def task_updated(self, task: Task) -> AppState:
        return self.dispatch(TaskUpdated(task))
