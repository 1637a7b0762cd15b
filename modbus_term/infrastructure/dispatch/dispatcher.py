"""Single logical thread for register map mutation.

Transport receive callbacks may fire on a serial reader thread or a
socket server thread. Everything that touches the RegisterStore is
marshaled onto one asyncio event loop instead of being locked.
"""

import asyncio
import logging
import threading
from typing import Any, Callable, Optional

_LOGGER = logging.getLogger(__name__)


class Dispatcher:
    """Marshals callables onto the owning event loop.

    Calls made on the loop's own thread run immediately, so code that is
    already on the dispatch thread stays synchronous and ordered. Calls
    from any other thread are queued with ``call_soon_threadsafe`` and
    run in arrival order.

    Example:
        >>> dispatcher = Dispatcher(asyncio.get_running_loop())
        >>> transport.add_external_write_listener(
        ...     lambda write: dispatcher.dispatch(reconciler.reconcile, write)
        ... )
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        """Initialize dispatcher.

        Args:
            loop: Loop that owns the register map (default: running loop)
        """
        self._loop = loop or asyncio.get_running_loop()
        self._thread_id: Optional[int] = None

        if self._loop.is_running():
            self._thread_id = threading.get_ident()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    def is_dispatch_thread(self) -> bool:
        """Whether the caller is already on the dispatch thread."""
        if self._thread_id is None:
            try:
                running = asyncio.get_running_loop()
            except RuntimeError:
                return False
            if running is not self._loop:
                return False
            self._thread_id = threading.get_ident()
        return threading.get_ident() == self._thread_id

    def dispatch(self, callback: Callable[..., Any], *args: Any) -> None:
        """Run ``callback(*args)`` on the dispatch thread.

        Runs inline when already there, otherwise queues it.
        """
        if self.is_dispatch_thread():
            self._invoke(callback, *args)
            return

        if self._loop.is_closed():
            _LOGGER.warning(
                "Dropping %s: event loop is closed",
                getattr(callback, "__name__", callback),
            )
            return

        self._loop.call_soon_threadsafe(self._invoke, callback, *args)

    def _invoke(self, callback: Callable[..., Any], *args: Any) -> None:
        try:
            callback(*args)
        except Exception as err:
            _LOGGER.error(
                "Dispatched callback %s failed: %s",
                getattr(callback, "__name__", callback),
                err,
                exc_info=True,
            )
