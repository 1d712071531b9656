"""
Thin REST transport used by the fallback creation paths and aspect attachment.

Every request fetches a fresh bearer token from the application-default
credentials, so a long-running provisioning session never sends a stale one.
"""

from collections.abc import Callable
from typing import Any

import requests
from google.api_core import exceptions
from google.auth.transport.requests import Request
from tenacity import RetryError, Retrying, retry_if_result, stop_after_delay, wait_fixed

from .clients import get_credentials
from .core import HTTP_TIMEOUT, OPERATION_POLL_INTERVAL, OPERATION_TIMEOUT
from .errors import ProvisionError
from .logger import logger


def access_token() -> str:
    """Refreshes the default credentials and returns a short-lived access token."""
    credentials, _ = get_credentials()
    credentials.refresh(Request())
    return str(credentials.token)


def _headers() -> dict[str, str]:
    return {
        "Authorization": f"Bearer {access_token()}",
        "Content-Type": "application/json",
    }


def _check(response: requests.Response) -> dict[str, Any]:
    if not response.ok:
        logger.error(
            f"{response.request.method} {response.url} returned "
            f"HTTP {response.status_code}: {response.text}"
        )
        raise exceptions.from_http_response(response)
    if not response.content:
        return {}
    return response.json()  # type: ignore[no-any-return]


def post_json(
    url: str, payload: dict[str, Any], params: dict[str, str] | None = None
) -> dict[str, Any]:
    """POSTs a JSON body and returns the decoded response."""
    logger.debug(f"POST {url} params={params}")
    response = requests.post(
        url, json=payload, params=params, headers=_headers(), timeout=HTTP_TIMEOUT
    )
    return _check(response)


def get_json(url: str) -> dict[str, Any]:
    logger.debug(f"GET {url}")
    response = requests.get(url, headers=_headers(), timeout=HTTP_TIMEOUT)
    return _check(response)


def poll_operation(
    fetch: Callable[[], dict[str, Any]],
    name: str,
    timeout: float = OPERATION_TIMEOUT,
    poll_interval: float = OPERATION_POLL_INTERVAL,
) -> dict[str, Any]:
    """
    Calls fetch until the google.longrunning Operation it returns is done.
    Raises ProvisionError when the operation fails or does not finish in time.
    """
    poller = Retrying(
        retry=retry_if_result(lambda op: not op.get("done")),
        stop=stop_after_delay(timeout),
        wait=wait_fixed(poll_interval),
        reraise=True,
    )
    try:
        operation: dict[str, Any] = poller(fetch)
    except RetryError as e:
        raise ProvisionError("operation", name, f"not done after {timeout}s") from e

    if "error" in operation:
        error = operation["error"]
        raise ProvisionError(
            "operation", name, error.get("message", "failed without a message")
        )
    return operation


def wait_for_operation(
    operation: dict[str, Any],
    base_url: str,
    timeout: float = OPERATION_TIMEOUT,
    poll_interval: float = OPERATION_POLL_INTERVAL,
) -> dict[str, Any]:
    """Waits on an Operation returned by a REST create call."""
    name = operation.get("name", "")
    if operation.get("done") or not name:
        # Already finished, or a synchronous response that is not an Operation
        return poll_operation(lambda: {**operation, "done": True}, name, timeout, 0)
    return poll_operation(
        lambda: get_json(f"{base_url}/{name}"), name, timeout, poll_interval
    )
