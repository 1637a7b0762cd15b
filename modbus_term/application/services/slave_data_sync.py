"""Slave data synchronizer service.

Keeps the transport's slave data image in step with local edits to the
register map.
"""

import logging
from typing import Callable, Optional

from ...domain.entities import BooleanRegisterDefinition
from ...domain.interfaces import IModbusTransport
from ...domain.value_objects import ChangeField, ChangeSet, RegisterKind
from .register_store import Entry, RegisterStore

_LOGGER = logging.getLogger(__name__)

_SYNC_FIELDS = frozenset(
    {
        ChangeField.ADDED,
        ChangeField.ADDRESS,
        ChangeField.DATA_TYPE,
        ChangeField.WORDS,
        ChangeField.VALUE,
    }
)


class SlaveDataSynchronizer:
    """Pushes locally originated store changes into the slave data image.

    Suppressed change sets come from a remote master's write that the
    transport already holds; pushing them again would echo the write back
    onto the bus, so they are skipped.

    Example:
        >>> sync = SlaveDataSynchronizer(store, transport)
        >>> sync.start()
        >>> store.set_text(RegisterKind.HOLDING_REGISTERS, 0, "42")
        >>> # transport.write_data_image(HOLDING_REGISTERS, 0, [42]) was called
    """

    def __init__(self, store: RegisterStore, transport: IModbusTransport):
        self._store = store
        self._transport = transport
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_running(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        """Subscribe to the store and push its current contents."""
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self.on_changes)
            self.sync_all()

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_changes(self, changes: ChangeSet) -> None:
        """Store listener: push entries whose data changed."""
        if changes.suppressed:
            _LOGGER.debug(
                "Skipping %d externally originated change(s)", len(changes)
            )
            return

        for entry in changes.entries():
            if entry.suppress_notifications:
                continue
            if _SYNC_FIELDS.intersection(changes.fields_for(entry)):
                self.push(changes.kind, entry)

    def push(self, kind: RegisterKind, entry: Entry) -> bool:
        """Write one entry's words (or bit) into the data image.

        Returns:
            True if written, False if the transport is not connected
        """
        if not self._transport.is_connected:
            _LOGGER.debug("Not connected, data image not updated")
            return False

        if isinstance(entry, BooleanRegisterDefinition):
            values = [entry.value]
        else:
            values = list(entry.words)
        self._transport.write_data_image(kind, entry.address, values)
        return True

    def sync_all(self) -> int:
        """Push every entry of every table; returns how many were written."""
        written = 0
        for kind in RegisterKind:
            for entry in self._store.entries(kind):
                if self.push(kind, entry):
                    written += 1
        return written
