"""CLI interface for the todo client.

Commands:
- run: Interactive todo list (default when no command is given)
- list: Print the current tasks
- add: Create a task
- toggle: Flip a task between done and not done
"""

import asyncio
import sys

import click
from rich.console import Console
from rich.text import Text

from . import __version__
from .app import run_app
from .config import load_client_config
from .controller import TodoController
from .logging_setup import setup_logging
from .service import TaskServiceClient
from .state import StateStore
from .view import task_row, task_table


console = Console()


async def _with_controller(ctx, action):
    """Build store, service and controller, run ``action`` and return the store."""
    config = ctx.obj["config"]
    store = StateStore(clear_stale_error=config.clear_stale_error)

    async with TaskServiceClient(config.base_url, transport=ctx.obj.get("transport")) as service:
        controller = TodoController(
            store, service, list_limit=config.list_limit, owner_id=config.owner_id
        )
        await action(controller)

    return store


def _exit_on_error(store: StateStore):
    if store.state.error is not None:
        console.print(Text(f"Error: {store.state.error}", style="red"))
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="todo-client")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False), help="Path to a TOML config file")
@click.option("--base-url", help="Task service root URL")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and state changes")
@click.pass_context
def main(ctx, config_path: str, base_url: str, verbose: bool):
    """Todo Client - a small terminal todo list backed by a REST service.

    Without a command, starts the interactive list.
    """
    ctx.ensure_object(dict)

    config = load_client_config(config_path)
    if base_url:
        config.base_url = base_url
    if verbose:
        config.log_level = "DEBUG"

    setup_logging(config.log_level, config.log_file)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
@click.pass_context
def run(ctx):
    """Start the interactive todo list."""
    try:
        run_app(ctx.obj["config"], console=console, transport=ctx.obj.get("transport"))
    except KeyboardInterrupt:
        console.print("\n[yellow]Bye.[/yellow]")


@main.command("list")
@click.option("--limit", "-n", type=click.IntRange(min=1), help="Number of tasks to fetch")
@click.pass_context
def list_tasks(ctx, limit: int):
    """List tasks from the service.

    Examples:
        todo-client list
        todo-client list --limit 10
    """
    if limit is not None:
        ctx.obj["config"].list_limit = limit

    store = asyncio.run(_with_controller(ctx, lambda c: c.refresh()))
    _exit_on_error(store)

    tasks = store.state.tasks
    if not tasks:
        console.print("[yellow]No tasks[/yellow]")
        return

    console.print(task_table(tasks))
    done = sum(1 for t in tasks if t.completed)
    console.print(f"[dim]{done}/{len(tasks)} completed[/dim]")


@main.command("add")
@click.argument("text")
@click.pass_context
def add_task(ctx, text: str):
    """Add a new task.

    Examples:
        todo-client add "Buy milk"
    """
    if not text.strip():
        console.print("[red]Error: Task text cannot be empty[/red]")
        sys.exit(1)

    store = asyncio.run(_with_controller(ctx, lambda c: c.submit_new_task(text)))
    _exit_on_error(store)

    task = store.state.tasks[0]
    console.print(Text.assemble(("Added task ", "green"), (f"{task.id}", "bold green"), ": ", task.text))


@main.command("toggle")
@click.argument("task_id", type=int)
@click.pass_context
def toggle_task(ctx, task_id: int):
    """Mark a listed task done, or undo it.

    The task must be among those returned by 'todo-client list'.
    """
    found = {}

    async def action(controller: TodoController):
        state = await controller.refresh()
        task = state.find_task(task_id)
        if state.error is None and task is not None:
            found["task"] = await controller.toggle_task(task.id, task.completed)

    store = asyncio.run(_with_controller(ctx, action))
    _exit_on_error(store)

    if "task" not in found:
        console.print(f"[red]Error: Task not found in the current list: {task_id}[/red]")
        sys.exit(1)

    task = store.state.find_task(task_id)
    text, _ = task_row(task)
    status = "[green]completed[/green]" if task.completed else "[blue]not completed[/blue]"
    console.print(Text.assemble(f"{task.id}: ", text))
    console.print(f"  Now {status}")


if __name__ == "__main__":
    main()
