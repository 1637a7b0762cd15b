"""External write reconciler service.

When this node acts as a slave, a remote master writes straight into the
transport's data image. The reconciler folds those writes back into the
RegisterStore so the local register map matches what the master wrote.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ...domain.value_objects import ChangeSet, ExternalWrite, RegisterKind
from ...infrastructure.dispatch import Dispatcher
from .communication_log import CommunicationLog
from .highlight_tracker import HighlightTracker
from .register_store import Entry, RegisterStore

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartialSpanUpdate:
    """An external write covered only part of a multi-word value.

    Only the words present in the write were applied; the others keep
    their previous contents.

    Attributes:
        entry: Register that was partially updated
        applied: Addresses whose words were taken from the write
        missing: Addresses of the span the write did not cover
    """

    entry: Entry
    applied: Tuple[int, ...]
    missing: Tuple[int, ...]


@dataclass
class ReconcileResult:
    """Outcome of reconciling one external write.

    Attributes:
        write: The write that was reconciled
        updated: Entries refreshed, one change set each
        change_sets: Change sets emitted by the store
        partial_updates: Multi-word values only partly covered
        unmatched: Written addresses no entry covers
    """

    write: ExternalWrite
    updated: List[Entry] = field(default_factory=list)
    change_sets: List[ChangeSet] = field(default_factory=list)
    partial_updates: List[PartialSpanUpdate] = field(default_factory=list)
    unmatched: List[int] = field(default_factory=list)

    @property
    def has_partial_updates(self) -> bool:
        return bool(self.partial_updates)


class ExternalWriteReconciler:
    """Applies remote master writes to the local register map.

    Coils: each written address with a matching entry is set.

    Registers, two passes:
        1. Single-word entries whose address was written take the new word.
        2. Multi-word entries (UInt32, Int32, Float32, Float64, ASCII)
           collect the words of their span present in the write. A full
           span is decoded and refreshed in one store call; a partial span
           applies only the present words and is reported as a
           PartialSpanUpdate.

    Every store call is flagged external, so the change sets are
    suppressed and the update is not written back to the bus. Updated
    entries are marked recently modified in the same change set and join
    the shared highlight set.

    Example:
        >>> store.add_register(RegisterKind.HOLDING_REGISTERS, DataType.UINT32, 10)
        >>> result = reconciler.reconcile(
        ...     ExternalWrite(RegisterKind.HOLDING_REGISTERS, 10, (0x0002, 0x0001))
        ... )
        >>> hex(store.get(RegisterKind.HOLDING_REGISTERS, 10).value)
        '0x10002'
    """

    def __init__(
        self,
        store: RegisterStore,
        highlight_tracker: Optional[HighlightTracker] = None,
        communication_log: Optional[CommunicationLog] = None,
    ):
        """Initialize reconciler.

        Args:
            store: Local register map
            highlight_tracker: Shared highlight timer (optional)
            communication_log: Receives one info event per write (optional)
        """
        self._store = store
        self._highlight = highlight_tracker
        self._log = communication_log

    def attach(self, transport, dispatcher: Dispatcher) -> None:
        """Listen for the transport's external writes on the dispatch thread."""
        transport.add_external_write_listener(
            lambda write: dispatcher.dispatch(self.reconcile, write)
        )

    def reconcile(self, write: ExternalWrite) -> ReconcileResult:
        """Fold one external write into the store.

        Args:
            write: Table, start address and written values

        Returns:
            ReconcileResult with the refreshed entries and any partial spans
        """
        if not write.values:
            return ReconcileResult(write)

        if write.kind.is_boolean:
            result = self._reconcile_bits(write)
        else:
            result = self._reconcile_registers(write)

        if result.updated:
            if self._highlight is not None:
                self._highlight.track(write.kind, result.updated)
            message = (
                f"{self._describe(write.kind)} at addresses {write.address_range()} "
                f"modified by external master"
            )
            _LOGGER.info("%s", message)
            if self._log is not None:
                self._log.info(message)
        else:
            _LOGGER.debug(
                "External write to %s %s matched no entries",
                write.kind.label,
                write.address_range(),
            )
        return result

    def _reconcile_bits(self, write: ExternalWrite) -> ReconcileResult:
        result = ReconcileResult(write)
        for offset, value in enumerate(write.values):
            address = write.start_address + offset
            entry = self._store.get(write.kind, address)
            if entry is None:
                result.unmatched.append(address)
                continue
            changes = self._store.set_bool(
                write.kind, entry, bool(value), external=True, mark_modified=True
            )
            result.updated.append(entry)
            result.change_sets.append(changes)
        return result

    def _reconcile_registers(self, write: ExternalWrite) -> ReconcileResult:
        result = ReconcileResult(write)
        kind = write.kind
        entries = self._store.entries(kind)
        covered = set()

        # Pass 1: single-word entries at a written address
        for entry in entries:
            if entry.is_multi_word:
                continue
            word = write.value_at(entry.address)
            if word is None:
                continue
            covered.add(entry.address)
            self._apply(kind, entry, [word], result)

        # Pass 2: reassemble multi-word values overlapping the write
        for entry in entries:
            if not entry.is_multi_word:
                continue
            if entry.end_address < write.start_address or entry.address > write.end_address:
                continue

            words = list(entry.words)
            applied: List[int] = []
            missing: List[int] = []
            for offset in range(entry.word_span):
                address = entry.address + offset
                word = write.value_at(address)
                if word is None:
                    missing.append(address)
                else:
                    words[offset] = word
                    applied.append(address)
            covered.update(applied)

            if missing:
                partial = PartialSpanUpdate(entry, tuple(applied), tuple(missing))
                result.partial_updates.append(partial)
                _LOGGER.warning(
                    "Partial update of %s at %d: wrote %s, kept %s",
                    entry.data_type.display_name,
                    entry.address,
                    _addresses(applied),
                    _addresses(missing),
                )
            self._apply(kind, entry, words, result)

        result.unmatched.extend(
            address
            for address in range(write.start_address, write.end_address + 1)
            if address not in covered
        )
        return result

    def _apply(
        self, kind: RegisterKind, entry: Entry, words: List[int], result: ReconcileResult
    ) -> None:
        changes = self._store.set_words(
            kind, entry, words, external=True, mark_modified=True
        )
        result.updated.append(entry)
        result.change_sets.append(changes)

    @staticmethod
    def _describe(kind: RegisterKind) -> str:
        return _KIND_NAMES.get(kind, kind.label.capitalize())


def _addresses(addresses: List[int]) -> str:
    if not addresses:
        return "-"
    if len(addresses) == 1:
        return str(addresses[0])
    return f"{addresses[0]}-{addresses[-1]}"


_KIND_NAMES: Dict[RegisterKind, str] = {
    RegisterKind.HOLDING_REGISTERS: "Holding register(s)",
    RegisterKind.INPUT_REGISTERS: "Input register(s)",
    RegisterKind.COILS: "Coil(s)",
    RegisterKind.DISCRETE_INPUTS: "Discrete input(s)",
}
