"""Task model for the todo client.

The remote service names its fields ``todo`` and ``userId``; inside the
client the same values are ``text`` and ``owner_id``.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Task:
    """A todo item as returned by the remote service."""

    id: int
    text: str
    completed: bool = False
    owner_id: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "todo": self.text,
            "completed": self.completed,
            "userId": self.owner_id,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        """Build a Task from a service payload.

        Raises:
            ValueError: If the payload is not a task object.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a task object, got {type(data).__name__}")

        task_id = data.get("id")
        text = data.get("todo")
        completed = data.get("completed", False)
        owner_id = data.get("userId", 0)

        # bool is a subclass of int, so reject it explicitly for the id fields
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise ValueError(f"Invalid task id: {task_id!r}")
        if not isinstance(text, str):
            raise ValueError(f"Invalid task text for id {task_id}: {text!r}")
        if not isinstance(completed, bool):
            raise ValueError(f"Invalid completed flag for id {task_id}: {completed!r}")
        if not isinstance(owner_id, int) or isinstance(owner_id, bool):
            raise ValueError(f"Invalid owner id for id {task_id}: {owner_id!r}")

        return cls(id=task_id, text=text, completed=completed, owner_id=owner_id)

    @property
    def toggle_label(self) -> str:
        """Label of the control that flips this task's status."""
        return "Undo" if self.completed else "Complete"
