"""HTTP client for the remote task service.

Three calls, all JSON:
- GET  /todos?limit=N   -> {"todos": [task, ...]}
- POST /todos/add       -> created task
- PUT  /todos/{id}      -> updated task

Every failure (bad status, transport error, unexpected payload) is raised
as NetworkError carrying a single human-readable message.
"""

import logging
from typing import Any, List, Optional

import httpx

from .models import Task


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://dummyjson.com"

FETCH_FAILED = "Failed to fetch todos."
ADD_FAILED = "Failed to add todo."
UPDATE_FAILED = "Failed to update todo."


class NetworkError(Exception):
    """A call to the task service did not produce the expected result."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TaskServiceClient:
    """Async wrapper around the remote task service."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Service root, e.g. ``https://dummyjson.com``.
            http_client: Client to send requests with. When omitted one is
                created (and closed by ``aclose``) with httpx's default timeout.
            transport: Transport for the created client; ignored when
                ``http_client`` is given.
        """
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(transport=transport)

    async def __aenter__(self) -> "TaskServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    async def _request(
        self,
        method: str,
        path: str,
        failure_message: str,
        **kwargs: Any,
    ) -> Any:
        """Send a request and return the decoded JSON body."""
        url = self._url(path)
        logger.debug("%s %s", method, url)

        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise NetworkError(str(e) or failure_message) from e

        if not response.is_success:
            logger.debug("%s %s returned HTTP %d", method, url, response.status_code)
            raise NetworkError(failure_message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.debug("%s %s returned a non-JSON body", method, url)
            raise NetworkError(failure_message, status_code=response.status_code) from e

    @staticmethod
    def _parse_task(payload: Any, failure_message: str) -> Task:
        try:
            return Task.from_dict(payload)
        except ValueError as e:
            logger.debug("Unexpected task payload: %s", e)
            raise NetworkError(failure_message) from e

    async def list_tasks(self, limit: int = 5) -> List[Task]:
        """Fetch the first ``limit`` tasks in server order."""
        payload = await self._request(
            "GET", "/todos", FETCH_FAILED, params={"limit": limit}
        )

        if not isinstance(payload, dict) or not isinstance(payload.get("todos"), list):
            logger.debug("Unexpected list payload: %r", payload)
            raise NetworkError(FETCH_FAILED)

        return [self._parse_task(item, FETCH_FAILED) for item in payload["todos"]]

    async def create_task(self, text: str, owner_id: int) -> Task:
        """Create a task; the returned copy carries the server-assigned id."""
        body = {"todo": text, "completed": False, "userId": owner_id}
        payload = await self._request("POST", "/todos/add", ADD_FAILED, json=body)
        return self._parse_task(payload, ADD_FAILED)

    async def update_task_status(self, task_id: int, completed: bool) -> Task:
        """Set a task's completed flag and return the server's copy."""
        payload = await self._request(
            "PUT", f"/todos/{task_id}", UPDATE_FAILED, json={"completed": completed}
        )
        return self._parse_task(payload, UPDATE_FAILED)
