"""Connection management decorators."""

import logging
from functools import wraps
from typing import Callable

from ...domain.exceptions import TransportFailure

_LOGGER = logging.getLogger(__name__)


def require_connection(transport_attr: str = "_transport"):
    """Decorator to ensure the transport is connected before an operation.

    Args:
        transport_attr: Name of the instance attribute holding the transport

    Raises:
        TransportFailure: If the transport is missing or not connected

    Example:
        @require_connection()
        async def execute(self, request: ModbusRequest) -> ExecuteRequestResult:
            # Connection is guaranteed - just do work
            pass
    """

    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            transport = getattr(self, transport_attr, None)
            if transport is None or not transport.is_connected:
                error_msg = f"{func.__name__} requires an open connection"
                _LOGGER.error(error_msg)
                raise TransportFailure(error_msg)

            return await func(self, *args, **kwargs)

        return wrapper

    return decorator
