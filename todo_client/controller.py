"""Controller: runs service calls and folds their results into the store.

Overlapping calls are not serialized. Whichever response resolves last
is the one the store ends up reflecting.
"""

import logging
from typing import Optional

from .models import Task
from .service import NetworkError, TaskServiceClient
from .state import AppState, StateStore


logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 5
DEFAULT_OWNER_ID = 5


class TodoController:
    """Sequences StateStore transitions around TaskServiceClient calls."""

    def __init__(
        self,
        store: StateStore,
        service: TaskServiceClient,
        list_limit: int = DEFAULT_LIST_LIMIT,
        owner_id: int = DEFAULT_OWNER_ID,
    ):
        self.store = store
        self.service = service
        self.list_limit = list_limit
        self.owner_id = owner_id

    async def refresh(self) -> AppState:
        """Reload the task list from the service."""
        self.store.begin_load()
        try:
            tasks = await self.service.list_tasks(limit=self.list_limit)
        except NetworkError as e:
            logger.debug("Refresh failed: %s", e.message)
            return self.store.load_failed(e.message)

        logger.debug("Refresh loaded %d task(s)", len(tasks))
        return self.store.load_succeeded(tasks)

    async def submit_new_task(self, text: str) -> Optional[Task]:
        """Create a task with ``text``; returns it, or None on failure.

        The text is sent as given; blank input is filtered by the caller.
        """
        try:
            task = await self.service.create_task(text, self.owner_id)
        except NetworkError as e:
            logger.debug("Create failed: %s", e.message)
            self.store.load_failed(e.message)
            return None

        self.store.task_added(task)
        return task

    async def toggle_task(self, task_id: int, current_completed: bool) -> Optional[Task]:
        """Flip a task's completed flag; returns the updated task or None."""
        try:
            task = await self.service.update_task_status(task_id, not current_completed)
        except NetworkError as e:
            logger.debug("Toggle of %d failed: %s", task_id, e.message)
            self.store.load_failed(e.message)
            return None

        self.store.task_updated(task)
        return task
