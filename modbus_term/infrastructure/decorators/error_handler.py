"""Error handling decorators for standardized exception logging."""

import logging
from functools import wraps
from typing import Callable

from ...domain.exceptions import TransportFailure


def handle_transport_errors(operation_name: str, logger: logging.Logger = None):
    """Decorator that logs errors escaping an async transport operation.

    Timeouts and exception replies are not errors at this level: the
    decorated coroutine turns them into result objects. What still
    escapes is a lost or unusable connection, logged without a stack
    trace, or an unexpected error, logged with one. Both are re-raised.

    Args:
        operation_name: Human-readable operation name for logging
        logger: Logger to use (defaults to function's module logger)

    Example:
        @handle_transport_errors("Execute request")
        async def execute(self, request: ModbusRequest) -> ExecuteRequestResult:
            payload = await self._transport.execute_request(request)
            ...
    """

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            log = logger or logging.getLogger(func.__module__)
            try:
                return await func(*args, **kwargs)
            except TransportFailure as err:
                log.error("%s transport failure: %s", operation_name, err)
                raise
            except Exception as err:
                log.error(
                    "%s unexpected error: %s",
                    operation_name,
                    err,
                    exc_info=True,
                )
                raise

        return wrapper

    return decorator
