"""Interactive terminal app.

Loop: render the current screen, ask the user for an action, hand the
action to the view, and wait for the scheduled call before drawing again.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

import questionary
from rich.console import Console

from .config import ClientConfig
from .controller import TodoController
from .service import TaskServiceClient
from .state import StateStore
from .view import PLACEHOLDER, Screen, TodoView


logger = logging.getLogger(__name__)

ADD = "add"
RELOAD = "reload"
RETRY = "retry"
QUIT = "quit"
TOGGLE_PREFIX = "toggle:"

Choice = Tuple[str, str]  # (title, value)


class QuestionaryPrompter:
    """Asks for input with questionary's async prompts."""

    async def choose(self, message: str, choices: List[Choice]) -> Optional[str]:
        return await questionary.select(
            message,
            choices=[questionary.Choice(title, value=value) for title, value in choices],
        ).ask_async()

    async def text(self, message: str) -> Optional[str]:
        return await questionary.text(message, instruction=f"({PLACEHOLDER})").ask_async()


def action_choices(view: TodoView) -> List[Choice]:
    """Actions offered for the screen the view is showing."""
    screen = view.screen

    if screen is Screen.ERROR:
        return [("Retry", RETRY), ("Quit", QUIT)]

    choices: List[Choice] = [("Add a task", ADD)]
    for task in view.state.tasks:
        choices.append((f"{task.toggle_label}: {task.text}", f"{TOGGLE_PREFIX}{task.id}"))
    choices.extend([("Reload", RELOAD), ("Quit", QUIT)])
    return choices


class TodoApp:
    """Drives a TodoView from user actions until the user quits."""

    def __init__(self, view: TodoView, prompter=None, console: Optional[Console] = None):
        self.view = view
        self.prompter = prompter or QuestionaryPrompter()
        self.console = console or view.console

    async def _wait_for_pending(self):
        if not self.view.pending:
            return
        message = "Loading todos..." if self.view.screen is Screen.LOADING else "Working..."
        with self.console.status(message):
            await self.view.settle()

    async def handle(self, action: str) -> bool:
        """Dispatch one action; returns False when the app should stop."""
        if action == QUIT:
            return False

        if action == ADD:
            text = await self.prompter.text("New task:")
            self.view.set_draft(text or "")
            self.view.submit()
        elif action in (RELOAD, RETRY):
            self.view.reload()
        elif action.startswith(TOGGLE_PREFIX):
            self.view.toggle(int(action[len(TOGGLE_PREFIX):]))
        else:
            logger.warning("Unknown action: %s", action)

        return True

    async def run(self):
        """Load the list, then serve actions until Quit or Ctrl+C."""
        self.view.reload()

        while True:
            await self._wait_for_pending()
            self.console.print()
            self.view.show()

            action = await self.prompter.choose("What next?", action_choices(self.view))
            if action is None or not await self.handle(action):
                break

        await self._wait_for_pending()


async def _run(config: ClientConfig, console: Optional[Console] = None, transport=None):
    store = StateStore(clear_stale_error=config.clear_stale_error)
    async with TaskServiceClient(config.base_url, transport=transport) as service:
        controller = TodoController(
            store, service, list_limit=config.list_limit, owner_id=config.owner_id
        )
        view = TodoView(store, controller, console=console)
        await TodoApp(view).run()


def run_app(config: ClientConfig, console: Optional[Console] = None, transport=None):
    """Build the app from ``config`` and run it until the user quits."""
    asyncio.run(_run(config, console, transport))
