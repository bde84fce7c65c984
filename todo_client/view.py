"""Rendering and input handling for the todo list.

The view draws one of three screens, chosen in priority order:
- LOADING: nothing loaded yet and a fetch is running
- ERROR: the last failed call left an error message
- LIST: header, new-task input and one row per task

Besides the in-progress draft text, the view keeps no state of its own.
Actions are scheduled as asyncio tasks so rendering never waits on the
network.
"""

import asyncio
import logging
from enum import Enum
from typing import Coroutine, Optional, Set, Tuple

from rich import box
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from .controller import TodoController
from .models import Task
from .state import AppState, StateStore


logger = logging.getLogger(__name__)

HEADER = "Todo List"
LOADING_TEXT = "Loading todos..."
PLACEHOLDER = "Add a new task"
RETRY_LABEL = "Retry"
ADD_LABEL = "Add"


class Screen(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    LIST = "list"


def select_screen(state: AppState) -> Screen:
    """Pick the screen to show for ``state``."""
    if state.loading and not state.tasks:
        return Screen.LOADING
    if state.error is not None:
        return Screen.ERROR
    return Screen.LIST


def button(label: str, style: str) -> Text:
    return Text(f" {label} ", style=style)


def task_row(task: Task) -> Tuple[Text, Text]:
    """Return the (text, toggle control) cells for one task."""
    if task.completed:
        text = Text(task.text, style="strike grey50")
        control = button(task.toggle_label, "bold white on dark_orange")
    else:
        text = Text(task.text, style="grey11")
        control = button(task.toggle_label, "bold white on green4")
    return text, control


def task_table(tasks) -> Table:
    """One row per task: text and its toggle control."""
    table = Table(show_header=False, box=box.SIMPLE, expand=True, padding=(0, 1))
    table.add_column("Task", ratio=1)
    table.add_column("Action", justify="right", no_wrap=True)
    for task in tasks:
        text, control = task_row(task)
        table.add_row(text, control, style="on honeydew2" if task.completed else None)
    return table


class TodoView:
    """Draws the store's state and turns user input into controller calls."""

    def __init__(
        self,
        store: StateStore,
        controller: TodoController,
        console: Optional[Console] = None,
    ):
        self.store = store
        self.controller = controller
        self.console = console or Console()
        self.draft = ""
        self.pending: Set[asyncio.Task] = set()

    @property
    def state(self) -> AppState:
        return self.store.state

    @property
    def screen(self) -> Screen:
        return select_screen(self.state)

    # --- Rendering ---

    def render(self) -> RenderableType:
        """Build the renderable for the current screen."""
        screen = self.screen
        if screen is Screen.LOADING:
            return self._render_loading()
        if screen is Screen.ERROR:
            return self._render_error()
        return self._render_list()

    def show(self):
        """Print the current screen to the console."""
        self.console.print(self.render())

    def _render_loading(self) -> RenderableType:
        return Spinner("dots", text=Text(LOADING_TEXT, style="grey35"), style="blue")

    def _render_error(self) -> RenderableType:
        return Panel(
            Group(
                Text(f"Error: {self.state.error}", style="bold red", justify="center"),
                Text(""),
                Text.assemble(button(RETRY_LABEL, "bold white on blue"), justify="center"),
            ),
            border_style="red",
            padding=(1, 2),
        )

    def _render_list(self) -> RenderableType:
        header = Text(HEADER, style="bold grey11", justify="center")

        if self.draft:
            field = Text(self.draft, style="grey11")
        else:
            field = Text(PLACEHOLDER, style="grey62")
        form = Text.assemble("> ", field, "  ", button(ADD_LABEL, "bold white on blue"))

        return Group(header, Text(""), form, task_table(self.state.tasks))

    # --- Input ---

    def _schedule(self, coro: Coroutine) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self.pending.add(task)
        task.add_done_callback(self.pending.discard)
        return task

    def set_draft(self, text: str):
        self.draft = text

    def submit(self) -> Optional[asyncio.Task]:
        """Send the draft as a new task and clear it straight away.

        Blank drafts are ignored and left as they are.
        """
        text = self.draft
        if not text.strip():
            return None

        scheduled = self._schedule(self.controller.submit_new_task(text))
        self.draft = ""
        return scheduled

    def toggle(self, task_id: int) -> Optional[asyncio.Task]:
        """Flip the status of a listed task."""
        task = self.state.find_task(task_id)
        if task is None:
            logger.debug("Toggle ignored: task %d is not listed", task_id)
            return None
        return self._schedule(self.controller.toggle_task(task.id, task.completed))

    def reload(self) -> asyncio.Task:
        """Fetch the task list again."""
        return self._schedule(self.controller.refresh())

    def retry(self) -> asyncio.Task:
        """The error screen's Retry control."""
        return self.reload()

    async def settle(self):
        """Wait until every scheduled action has resolved."""
        while self.pending:
            await asyncio.gather(*list(self.pending))
