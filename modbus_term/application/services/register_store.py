"""Register store service.

Holds the four Modbus data tables of the local register map and is the
only place entries are mutated. Every mutation returns a ChangeSet with
the exact (entry, field, new value) tuples it produced and broadcasts it
to subscribers.
"""

import logging
import math
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from ...domain.entities import BooleanRegisterDefinition, RegisterDefinition
from ...domain.exceptions import DuplicateAddressError, EntryNotFoundError
from ...domain.services.address_allocator import (
    allocate_addresses,
    find_overlaps,
    next_free_address,
)
from ...domain.value_objects import ChangeField, ChangeSet, DataType, RegisterKind

_LOGGER = logging.getLogger(__name__)

Entry = Union[RegisterDefinition, BooleanRegisterDefinition]
EntryRef = Union[Entry, int]
ChangeListener = Callable[[ChangeSet], None]

# Fields compared before/after a mutation, with the attribute they read
_REGISTER_FIELDS = (
    (ChangeField.ADDRESS, "address"),
    (ChangeField.DATA_TYPE, "data_type"),
    (ChangeField.WORDS, "words"),
    (ChangeField.VALUE, "value"),
    (ChangeField.FORMATTED_VALUE, "formatted_value"),
    (ChangeField.NAME, "name"),
    (ChangeField.DESCRIPTION, "description"),
    (ChangeField.RECENTLY_MODIFIED, "recently_modified"),
)
_BOOLEAN_FIELDS = (
    (ChangeField.ADDRESS, "address"),
    (ChangeField.VALUE, "value"),
    (ChangeField.FORMATTED_VALUE, "formatted_value"),
    (ChangeField.NAME, "name"),
    (ChangeField.DESCRIPTION, "description"),
    (ChangeField.RECENTLY_MODIFIED, "recently_modified"),
)


def _unchanged(old: Any, new: Any) -> bool:
    """Field equality where a NaN float equals itself."""
    if isinstance(old, float) and isinstance(new, float):
        if math.isnan(old) and math.isnan(new):
            return True
    return old == new


class RegisterStore:
    """Ordered register and coil tables with contiguous address allocation.

    Each table is kept sorted by address and no two entries of one kind
    have overlapping spans. Holding and input registers are resequenced
    from address 0 whenever a data type or word span changes; coil and
    discrete input tables keep their first entry's address as the base.

    Mutations flagged ``external=True`` come from a remote master's write.
    Their change sets are marked suppressed and the entry's
    ``suppress_notifications`` flag is held while they apply, so the
    transport-facing update path does not echo them back onto the bus.

    Example:
        >>> store = RegisterStore()
        >>> for data_type in (DataType.UINT16, DataType.FLOAT32, DataType.UINT16):
        ...     store.add_register(RegisterKind.HOLDING_REGISTERS, data_type)
        >>> [e.address for e in store.entries(RegisterKind.HOLDING_REGISTERS)]
        [0, 1, 3]
    """

    def __init__(self, reverse_order: bool = False):
        """Initialize empty tables.

        Args:
            reverse_order: Most-significant word first for multi-word values
        """
        self._tables: Dict[RegisterKind, List[Entry]] = {kind: [] for kind in RegisterKind}
        self._listeners: List[ChangeListener] = []
        self._reverse_order = reverse_order

    @property
    def reverse_order(self) -> bool:
        return self._reverse_order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def entries(self, kind: RegisterKind) -> List[Entry]:
        """Entries of one table in address order (a copy of the list)."""
        return list(self._tables[kind])

    def get(self, kind: RegisterKind, address: int) -> Optional[Entry]:
        """Entry whose base address is ``address``, or None."""
        for entry in self._tables[kind]:
            if entry.address == address:
                return entry
        return None

    def find_covering(self, kind: RegisterKind, address: int) -> Optional[Entry]:
        """Entry whose span contains ``address``, or None."""
        for entry in self._tables[kind]:
            if entry.covers(address):
                return entry
        return None

    def contains(self, kind: RegisterKind, entry: Entry) -> bool:
        return any(held is entry for held in self._tables[kind])

    def next_address(self, kind: RegisterKind) -> int:
        """Address a new entry is appended at."""
        return next_free_address(self._tables[kind])

    def __len__(self) -> int:
        return sum(len(table) for table in self._tables.values())

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change set listener.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Adding and removing
    # ------------------------------------------------------------------

    def add_register(
        self,
        kind: RegisterKind,
        data_type: DataType = DataType.UINT16,
        address: Optional[int] = None,
        value: Any = None,
        name: str = "",
        description: str = "",
    ) -> ChangeSet:
        """Add a holding or input register.

        Args:
            kind: HOLDING_REGISTERS or INPUT_REGISTERS
            data_type: Type of the value
            address: Base address; None appends after the last entry
            value: Initial typed value or text (default all-zero words)
            name: Label
            description: Free text

        Returns:
            ChangeSet with one ADDED change (new_value is the entry)

        Raises:
            ValueError: If kind is a bit table
            DuplicateAddressError: If the address is taken or the span overlaps
            FormatError: If value does not match data_type
        """
        if kind.is_boolean:
            raise ValueError(f"{kind.label} hold bits, use add_boolean")

        register = RegisterDefinition(
            address=self.next_address(kind) if address is None else address,
            data_type=data_type,
            name=name,
            description=description,
        )
        if value is not None:
            register.load_value(value, self._reverse_order)
        else:
            register.refresh(self._reverse_order)

        return self._insert(kind, register)

    def add_boolean(
        self,
        kind: RegisterKind,
        address: Optional[int] = None,
        value: bool = False,
        name: str = "",
        description: str = "",
    ) -> ChangeSet:
        """Add a coil or discrete input.

        Raises:
            ValueError: If kind is a register table
            DuplicateAddressError: If the address is taken
        """
        if not kind.is_boolean:
            raise ValueError(f"{kind.label} hold words, use add_register")

        entry = BooleanRegisterDefinition(
            address=self.next_address(kind) if address is None else address,
            value=value,
            name=name,
            description=description,
        )
        return self._insert(kind, entry)

    def remove(self, kind: RegisterKind, entry: EntryRef) -> ChangeSet:
        """Remove an entry.

        Raises:
            EntryNotFoundError: If the entry is not held by this table
        """
        entry = self._resolve(kind, entry)
        self._tables[kind] = [held for held in self._tables[kind] if held is not entry]

        changes = ChangeSet(kind)
        changes.add(entry, ChangeField.REMOVED, entry)
        _LOGGER.debug("Removed %s entry at %d", kind.label, entry.address)
        return self._emit(changes)

    def clear(self, kind: RegisterKind) -> ChangeSet:
        """Remove every entry of one table."""
        changes = ChangeSet(kind)
        for entry in self._tables[kind]:
            changes.add(entry, ChangeField.REMOVED, entry)
        self._tables[kind] = []
        return self._emit(changes)

    # ------------------------------------------------------------------
    # Value updates
    # ------------------------------------------------------------------

    def set_text(
        self,
        kind: RegisterKind,
        entry: EntryRef,
        text: Any,
        external: bool = False,
    ) -> ChangeSet:
        """Set a register from operator text (or a typed value).

        The text is encoded with the entry's data type. An ASCII string
        whose word span changes triggers a resequence in the same change
        set.

        Raises:
            FormatError: If the text does not match the data type
            ValueError: If the longer string no longer fits the address space
        """
        register = self._resolve_register(kind, entry)
        previous = self._state(register)

        def apply() -> None:
            register.load_value(text, self._reverse_order)

        changes = self._mutate(kind, [register], apply, external)
        if register.word_span != previous[2]:
            changes.extend(self._relayout(kind, register, previous, external))
        return self._emit(changes)

    def set_words(
        self,
        kind: RegisterKind,
        entry: EntryRef,
        words: Sequence[int],
        external: bool = False,
        mark_modified: bool = False,
    ) -> ChangeSet:
        """Replace a register's raw words, recomputing value and display text.

        Args:
            kind: Register table
            entry: Entry or its base address
            words: New raw words (fitted to the type's span)
            external: Originated from a remote master
            mark_modified: Also set recently_modified in the same change set

        Returns:
            One change set covering every field that changed, including
            the address moves when an ASCII string's word span changed

        Raises:
            ValueError: If the new span no longer fits the address space
        """
        register = self._resolve_register(kind, entry)
        previous = self._state(register)

        def apply() -> None:
            register.load_words(words, self._reverse_order)
            if mark_modified:
                register.recently_modified = True

        changes = self._mutate(kind, [register], apply, external)
        if register.word_span != previous[2]:
            changes.extend(self._relayout(kind, register, previous, external))
        return self._emit(changes)

    def set_bool(
        self,
        kind: RegisterKind,
        entry: EntryRef,
        value: bool,
        external: bool = False,
        mark_modified: bool = False,
    ) -> ChangeSet:
        """Set a coil or discrete input."""
        target = self._resolve(kind, entry)
        if not isinstance(target, BooleanRegisterDefinition):
            raise ValueError(f"Entry at {target.address} is not a bit")

        def apply() -> None:
            target.value = bool(value)
            if mark_modified:
                target.recently_modified = True

        return self._emit(self._mutate(kind, [target], apply, external))

    def set_data_type(
        self, kind: RegisterKind, entry: EntryRef, data_type: DataType
    ) -> ChangeSet:
        """Reinterpret a register as another data type and resequence.

        Raises:
            ValueError: If the wider layout no longer fits the address
                space; the register keeps its old type and words
        """
        register = self._resolve_register(kind, entry)
        if register.data_type == data_type:
            return ChangeSet(kind)
        previous = self._state(register)

        def apply() -> None:
            register.change_type(data_type, self._reverse_order)

        changes = self._mutate(kind, [register], apply, external=False)
        changes.extend(self._relayout(kind, register, previous))
        _LOGGER.debug(
            "Register at %d changed to %s", register.address, data_type.display_name
        )
        return self._emit(changes)

    def set_metadata(
        self,
        kind: RegisterKind,
        entry: EntryRef,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ChangeSet:
        """Rename an entry or change its description."""
        target = self._resolve(kind, entry)

        def apply() -> None:
            if name is not None:
                target.name = name
            if description is not None:
                target.description = description

        return self._emit(self._mutate(kind, [target], apply, external=False))

    def set_recently_modified(
        self, kind: RegisterKind, entries: Iterable[EntryRef], flag: bool
    ) -> ChangeSet:
        """Set or clear the highlight flag on several entries at once."""
        targets = [self._resolve(kind, entry) for entry in entries]

        def apply() -> None:
            for target in targets:
                target.recently_modified = flag

        return self._emit(self._mutate(kind, targets, apply, external=False))

    def set_reverse_order(self, reverse_order: bool) -> List[ChangeSet]:
        """Switch the word order and re-decode every register.

        Raw words are kept; only their interpretation changes.
        """
        if reverse_order == self._reverse_order:
            return []
        self._reverse_order = reverse_order

        emitted = []
        for kind in (RegisterKind.HOLDING_REGISTERS, RegisterKind.INPUT_REGISTERS):
            registers = self._tables[kind]

            def apply(registers=registers) -> None:
                for register in registers:
                    register.refresh(reverse_order)

            emitted.append(self._emit(self._mutate(kind, registers, apply, external=False)))
        return emitted

    # ------------------------------------------------------------------
    # Address allocation
    # ------------------------------------------------------------------

    def resequence(self, kind: RegisterKind) -> ChangeSet:
        """Reassign contiguous addresses in current address order.

        Returns:
            ChangeSet with one ADDRESS change per entry that moved
        """
        return self._emit(self._resequence(kind))

    def _resequence(self, kind: RegisterKind, suppressed: bool = False) -> ChangeSet:
        start = None if kind.is_boolean else 0
        assignment = allocate_addresses(self._tables[kind], start=start)

        changes = ChangeSet(kind, suppressed=suppressed)
        for entry, address in assignment:
            if entry.address != address:
                entry.address = address
                changes.add(entry, ChangeField.ADDRESS, address)

        self._tables[kind] = [entry for entry, _ in assignment]
        if changes:
            _LOGGER.debug("Resequenced %s: %d entries moved", kind.label, len(changes))
        return changes

    @staticmethod
    def _state(register: RegisterDefinition) -> Tuple[DataType, List[int], int, bool]:
        return (
            register.data_type,
            list(register.words),
            register.word_span,
            register.recently_modified,
        )

    def _relayout(
        self,
        kind: RegisterKind,
        register: RegisterDefinition,
        previous: Tuple[DataType, List[int], int, bool],
        suppressed: bool = False,
    ) -> ChangeSet:
        """Resequence after a span change, restoring ``register`` on overflow."""
        try:
            return self._resequence(kind, suppressed=suppressed)
        except ValueError:
            data_type, words, _, recently_modified = previous
            register.data_type = data_type
            register.words = words
            register.recently_modified = recently_modified
            register.refresh(self._reverse_order)
            _LOGGER.warning(
                "%s no longer fit the address space, register at %d restored",
                kind.label,
                register.address,
            )
            raise

    # ------------------------------------------------------------------
    # Persistence records
    # ------------------------------------------------------------------

    def export(self, kind: RegisterKind) -> List[Dict[str, Any]]:
        """Serialize one table to entry records."""
        return [entry.to_dict() for entry in self._tables[kind]]

    def import_entries(
        self, kind: RegisterKind, records: Iterable[Dict[str, Any]]
    ) -> ChangeSet:
        """Replace one table with entries built from records.

        The records are all parsed before the table is touched, so a bad
        record leaves the current entries in place.

        Raises:
            DuplicateAddressError: If two records share or overlap addresses
            FormatError: If a value does not match its data type
        """
        if kind.is_boolean:
            imported = [BooleanRegisterDefinition.from_dict(record) for record in records]
        else:
            imported = [
                RegisterDefinition.from_dict(record, self._reverse_order)
                for record in records
            ]

        self._check_overlaps(kind, imported)

        changes = ChangeSet(kind)
        for entry in self._tables[kind]:
            changes.add(entry, ChangeField.REMOVED, entry)
        self._tables[kind] = sorted(imported, key=lambda entry: entry.address)
        for entry in self._tables[kind]:
            changes.add(entry, ChangeField.ADDED, entry)

        _LOGGER.info("Imported %d %s", len(imported), kind.label)
        return self._emit(changes)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _check_overlaps(kind: RegisterKind, entries: Sequence[Entry]) -> None:
        overlaps = find_overlaps(entries)
        if not overlaps:
            return
        first, second = overlaps[0]
        if first.address == second.address:
            raise DuplicateAddressError(
                f"{kind.label} already has an entry at address {first.address}"
            )
        raise DuplicateAddressError(
            f"{kind.label} entry at {second.address} overlaps "
            f"{first.address}-{first.end_address}"
        )

    def _insert(self, kind: RegisterKind, entry: Entry) -> ChangeSet:
        self._check_overlaps(kind, self._tables[kind] + [entry])

        table = self._tables[kind]
        position = len(table)
        for index, held in enumerate(table):
            if held.address > entry.address:
                position = index
                break
        table.insert(position, entry)

        changes = ChangeSet(kind)
        changes.add(entry, ChangeField.ADDED, entry)
        _LOGGER.debug("Added %s entry at %d", kind.label, entry.address)
        return self._emit(changes)

    def _resolve(self, kind: RegisterKind, entry: EntryRef) -> Entry:
        if isinstance(entry, int) and not isinstance(entry, bool):
            found = self.get(kind, entry)
            if found is None:
                raise EntryNotFoundError(f"No {kind.label} entry at address {entry}")
            return found
        if not self.contains(kind, entry):
            raise EntryNotFoundError(f"Entry is not held by {kind.label}: {entry!r}")
        return entry

    def _resolve_register(self, kind: RegisterKind, entry: EntryRef) -> RegisterDefinition:
        register = self._resolve(kind, entry)
        if not isinstance(register, RegisterDefinition):
            raise ValueError(f"Entry at {register.address} is not a register")
        return register

    def _mutate(
        self,
        kind: RegisterKind,
        targets: Sequence[Entry],
        apply: Callable[[], None],
        external: bool,
    ) -> ChangeSet:
        """Run ``apply`` and diff the tracked fields of ``targets``."""
        before = [self._snapshot(target) for target in targets]

        if external:
            for target in targets:
                target.suppress_notifications = True
        try:
            apply()
        finally:
            if external:
                for target in targets:
                    target.suppress_notifications = False

        changes = ChangeSet(kind, suppressed=external)
        for target, snapshot in zip(targets, before):
            for change_field, value in self._snapshot(target).items():
                if not _unchanged(snapshot[change_field], value):
                    changes.add(target, change_field, value)
        return changes

    @staticmethod
    def _snapshot(entry: Entry) -> Dict[ChangeField, Any]:
        fields = _REGISTER_FIELDS if isinstance(entry, RegisterDefinition) else _BOOLEAN_FIELDS
        snapshot = {}
        for change_field, attribute in fields:
            value = getattr(entry, attribute)
            snapshot[change_field] = tuple(value) if isinstance(value, list) else value
        return snapshot

    def _emit(self, changes: ChangeSet) -> ChangeSet:
        if not changes:
            return changes
        for listener in list(self._listeners):
            try:
                listener(changes)
            except Exception as err:
                _LOGGER.error("Error in change listener: %s", err, exc_info=True)
        return changes
