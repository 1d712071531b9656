from collections.abc import Callable
from concurrent import futures
from typing import Any

from google.api_core import exceptions

from .errors import ProvisionError
from .logger import logger
from .schemas.results import ProvisionResult, ProvisionStatus


def probe_exists(fetch: Callable[[], Any]) -> bool:
    """
    Runs an existence getter. NotFound means absent; any other API error is
    treated as absent too, and the create path gets to surface the real problem.
    """
    try:
        fetch()
    except exceptions.NotFound:
        return False
    except exceptions.GoogleAPICallError as e:
        logger.debug(f"Existence probe failed, assuming absent: {e}")
        return False
    return True


def wait_for_result(operation: Any, kind: str, name: str, timeout: float) -> Any:
    """
    Waits on a client-library long-running operation.
    A timeout is fatal since the resource may still be CREATING.
    """
    try:
        return operation.result(timeout=timeout)
    except futures.TimeoutError as e:
        raise ProvisionError(kind, name, f"operation not done after {timeout}s") from e


def _already_exists(e: Exception) -> bool:
    # AlreadyExists is a Conflict subclass; REST fallbacks surface plain 409s
    return isinstance(e, exceptions.Conflict)


def ensure(
    kind: str,
    name: str,
    probe: Callable[[], bool],
    create: Callable[[], Any],
    fallback: Callable[[], Any] | None = None,
) -> ProvisionResult:
    """
    Check-then-create for a single resource.
    Probe first; if absent, try the primary path, then the fallback once.
    """
    if probe():
        logger.info(f"{kind} '{name}' already exists.")
        return ProvisionResult(kind=kind, name=name, status=ProvisionStatus.EXISTS)

    try:
        create()
        return ProvisionResult(kind=kind, name=name, status=ProvisionStatus.CREATED)
    except ProvisionError:
        # Final failures skip the fallback
        raise
    except Exception as e:
        if _already_exists(e):
            return ProvisionResult(
                kind=kind, name=name, status=ProvisionStatus.EXISTS
            )
        if fallback is None:
            raise ProvisionError(kind, name, f"creation failed: {e}") from e
        logger.warning(f"Primary create for {kind} '{name}' failed: {e}")

    logger.info(f"Retrying {kind} '{name}' through the fallback path...")
    try:
        fallback()
    except ProvisionError:
        raise
    except Exception as e:
        if _already_exists(e):
            return ProvisionResult(
                kind=kind, name=name, status=ProvisionStatus.EXISTS
            )
        raise ProvisionError(kind, name, f"all creation paths failed: {e}") from e

    return ProvisionResult(
        kind=kind, name=name, status=ProvisionStatus.CREATED_FALLBACK
    )
