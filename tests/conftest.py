"""Shared fixtures for todo_client tests."""

import io

import pytest
from rich.console import Console

from todo_client.controller import TodoController
from todo_client.models import Task
from todo_client.state import StateStore
from todo_client.view import TodoView

from fakes import FakeTaskService


@pytest.fixture
def five_tasks():
    """Tasks 1-5, none completed."""
    return [Task(id=i, text=f"Task {i}", completed=False, owner_id=i * 10) for i in range(1, 6)]


@pytest.fixture
def service(five_tasks):
    return FakeTaskService(five_tasks)


@pytest.fixture
def store():
    return StateStore()


@pytest.fixture
def controller(store, service):
    return TodoController(store, service)


@pytest.fixture
def console():
    """A recording console that writes nowhere."""
    return Console(record=True, width=80, file=io.StringIO(), color_system=None)


@pytest.fixture
def view(store, controller, console):
    return TodoView(store, controller, console=console)
