import logging
from fastapi import HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from typing import Any, Callable

from ..results import MessageKind, Result
from ..services import BookSwapService

logger = logging.getLogger(__name__)

STATUS_CODES = {
    MessageKind.SUCCESS: 200,
    MessageKind.INVALID_PAYLOAD: 400,
    MessageKind.NOT_FOUND: 404,
    MessageKind.ERROR: 500,
}


def get_service(request: Request) -> BookSwapService:
    return request.app.state.service


def get_caller(request: Request) -> str:
    """Caller principal forwarded by the upstream identity layer."""
    header = request.app.state.settings.caller_header
    caller = request.headers.get(header)
    if not caller:
        raise HTTPException(status_code=401, detail=f"Missing {header} header")
    return caller


def unwrap(result: Result[Any]) -> Any:
    """Return the value of an ``Ok`` or raise the matching HTTP error for an ``Err``."""
    if result.ok:
        return result.value
    raise HTTPException(status_code=STATUS_CODES[result.kind], detail=result.text)


async def call(operation: Callable[..., Result[Any]], *args: Any) -> Any:
    """Run a service operation off the event loop and unwrap its result.

    Operations block on the service lock and the store, so they go to the
    threadpool rather than running inside the async handler.
    """
    try:
        result = await run_in_threadpool(operation, *args)
    except Exception as e:
        logger.exception("%s raised", operation.__name__)
        raise HTTPException(status_code=500, detail=str(e))
    return unwrap(result)
