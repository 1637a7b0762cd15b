"""Change sets emitted by register store mutations.

Entities never broadcast their own property changes. Every store
mutation returns one ChangeSet describing exactly which fields of which
entries changed, and consumers (UI, slave data sync) apply that delta.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, List, Optional

from .register_kind import RegisterKind


class ChangeField(Enum):
    """Fields of a register or coil entry that can change."""

    ADDED = "added"
    REMOVED = "removed"
    ADDRESS = "address"
    DATA_TYPE = "data_type"
    WORDS = "words"
    VALUE = "value"
    FORMATTED_VALUE = "formatted_value"
    NAME = "name"
    DESCRIPTION = "description"
    RECENTLY_MODIFIED = "recently_modified"


@dataclass(frozen=True)
class Change:
    """A single (entry, field, new value) tuple.

    Attributes:
        entry: The RegisterDefinition or BooleanRegisterDefinition affected
        field: Which field changed
        new_value: Value of the field after the mutation
    """

    entry: Any
    field: ChangeField
    new_value: Any = None


@dataclass
class ChangeSet:
    """Minimal delta produced by one store mutation.

    Attributes:
        kind: Data table the changed entries belong to
        changes: Ordered field changes
        suppressed: True when the mutation originated outside this node
            (a remote master's write) and must not be echoed to the bus
    """

    kind: RegisterKind
    changes: List[Change] = field(default_factory=list)
    suppressed: bool = False

    def add(self, entry: Any, change_field: ChangeField, new_value: Any = None) -> None:
        """Append a change."""
        self.changes.append(Change(entry, change_field, new_value))

    def extend(self, other: "ChangeSet") -> None:
        """Merge another change set of the same kind into this one."""
        self.changes.extend(other.changes)

    def entries(self) -> List[Any]:
        """Distinct entries touched, in first-change order."""
        seen: List[Any] = []
        for change in self.changes:
            if not any(change.entry is entry for entry in seen):
                seen.append(change.entry)
        return seen

    def fields_for(self, entry: Any) -> List[ChangeField]:
        """Fields changed on one entry."""
        return [change.field for change in self.changes if change.entry is entry]

    def find(self, entry: Any, change_field: ChangeField) -> Optional[Change]:
        """Last change of a given field on an entry, if any."""
        for change in reversed(self.changes):
            if change.entry is entry and change.field == change_field:
                return change
        return None

    def __iter__(self) -> Iterator[Change]:
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def __bool__(self) -> bool:
        return bool(self.changes)
