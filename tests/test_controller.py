"""Tests for controller.py - service calls folded into the store."""

import asyncio

import pytest

from todo_client.controller import TodoController
from todo_client.models import Task
from todo_client.service import ADD_FAILED, FETCH_FAILED, UPDATE_FAILED
from todo_client.state import BeginLoad, LoadSucceeded, StateStore

from fakes import FakeTaskService


class TestRefresh:
    """Tests for TodoController.refresh."""

    @pytest.mark.asyncio
    async def test_refresh_loads_tasks(self, controller, store, service, five_tasks):
        """Test a successful refresh."""
        state = await controller.refresh()

        assert state is store.state
        assert list(state.tasks) == five_tasks
        assert state.loading is False
        assert service.calls == [("list", 5)]

    @pytest.mark.asyncio
    async def test_refresh_dispatches_begin_load_first(self, controller, store):
        """Test the transition order of a refresh."""
        seen = []
        store.subscribe(lambda state, transition: seen.append(type(transition)))
        await controller.refresh()
        assert seen == [BeginLoad, LoadSucceeded]

    @pytest.mark.asyncio
    async def test_refresh_is_loading_while_in_flight(self, controller, store, service):
        """Test that loading stays true until the list call resolves."""
        service.gates["list"] = asyncio.Event()
        store.load_succeeded([])

        pending = asyncio.ensure_future(controller.refresh())
        await asyncio.sleep(0)
        assert store.state.loading is True

        service.gates["list"].set()
        await pending
        assert store.state.loading is False

    @pytest.mark.asyncio
    async def test_refresh_uses_list_limit(self, store, service):
        """Test that the configured limit is passed to the service."""
        controller = TodoController(store, service, list_limit=2)
        await controller.refresh()
        assert service.calls == [("list", 2)]
        assert len(store.state.tasks) == 2

    @pytest.mark.asyncio
    async def test_refresh_failure(self, controller, store, service):
        """Test that a failed refresh stores the message."""
        service.fail = True
        state = await controller.refresh()

        assert state.error == FETCH_FAILED
        assert state.loading is False
        assert state.tasks == ()


class TestSubmitNewTask:
    """Tests for TodoController.submit_new_task."""

    @pytest.mark.asyncio
    async def test_submit_prepends_created_task(self, controller, store, service):
        """Test a successful create."""
        await controller.refresh()
        task = await controller.submit_new_task("Buy milk")

        assert task == Task(id=101, text="Buy milk", completed=False, owner_id=5)
        assert len(store.state.tasks) == 6
        assert store.state.tasks[0] == task
        assert service.calls[-1] == ("create", "Buy milk", 5)

    @pytest.mark.asyncio
    async def test_submit_uses_owner_id(self, store, service):
        """Test the configured owner id is sent."""
        controller = TodoController(store, service, owner_id=9)
        await controller.submit_new_task("x")
        assert service.calls == [("create", "x", 9)]

    @pytest.mark.asyncio
    async def test_submit_does_not_validate_text(self, controller, service):
        """Test that blank text is sent as given."""
        await controller.submit_new_task("   ")
        assert service.calls == [("create", "   ", 5)]

    @pytest.mark.asyncio
    async def test_submit_failure_routes_to_load_failed(self, controller, store, service):
        """Test that a failed create sets the full-screen error and keeps tasks."""
        await controller.refresh()
        service.fail = True

        assert await controller.submit_new_task("Buy milk") is None
        assert store.state.error == ADD_FAILED
        assert len(store.state.tasks) == 5


class TestToggleTask:
    """Tests for TodoController.toggle_task."""

    @pytest.mark.asyncio
    async def test_toggle_completes_task(self, controller, store, service):
        """Test toggling an incomplete task."""
        await controller.refresh()
        task = await controller.toggle_task(3, False)

        assert task.completed is True
        assert service.calls[-1] == ("update", 3, True)
        assert store.state.find_task(3).completed is True
        assert [t.completed for t in store.state.tasks] == [False, False, True, False, False]

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_status(self, controller, store):
        """Test that two awaited toggles return the task to its original value."""
        await controller.refresh()

        first = await controller.toggle_task(2, store.state.find_task(2).completed)
        second = await controller.toggle_task(2, first.completed)

        assert second.completed is False
        assert store.state.find_task(2).completed is False

    @pytest.mark.asyncio
    async def test_toggle_failure(self, controller, store):
        """Test that a failed update sets the error."""
        await controller.refresh()
        assert await controller.toggle_task(42, False) is None
        assert store.state.error == UPDATE_FAILED
        assert len(store.state.tasks) == 5


class TestOverlappingCalls:
    """Tests for calls that overlap on the event loop."""

    @pytest.mark.asyncio
    async def test_last_resolved_response_wins(self, five_tasks):
        """Test that responses apply in resolution order, not call order."""
        store = StateStore()
        store.load_succeeded(five_tasks)

        release = {True: asyncio.Event(), False: asyncio.Event()}

        class SlowService(FakeTaskService):
            async def update_task_status(self, task_id, completed):
                await release[completed].wait()
                return Task(id=task_id, text=f"Task {task_id}", completed=completed, owner_id=10)

        controller = TodoController(store, SlowService(five_tasks))

        complete = asyncio.ensure_future(controller.toggle_task(1, False))
        undo = asyncio.ensure_future(controller.toggle_task(1, True))

        # the later call resolves first, the earlier one lands last
        release[False].set()
        await undo
        assert store.state.find_task(1).completed is False

        release[True].set()
        await complete
        assert store.state.find_task(1).completed is True
