"""Shared highlight timer for externally modified entries."""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple

from ...const import HIGHLIGHT_DURATION
from ...domain.value_objects import ChangeSet, RegisterKind
from .register_store import Entry, RegisterStore

_LOGGER = logging.getLogger(__name__)


class HighlightTracker:
    """Keeps recently modified entries highlighted for a fixed window.

    All highlighted entries share one timer. The timer is started by the
    first highlight and is not restarted by later ones, so any number of
    external writes inside the window end in a single clear.

    Example:
        >>> tracker = HighlightTracker(store, duration=5.0)
        >>> tracker.track(RegisterKind.HOLDING_REGISTERS, [register])
        >>> tracker.is_running
        True
    """

    def __init__(
        self,
        store: RegisterStore,
        duration: float = HIGHLIGHT_DURATION,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """Initialize tracker.

        Args:
            store: Store owning the highlighted entries
            duration: Seconds until highlighted entries are cleared
            loop: Loop scheduling the timer (default: running loop)
        """
        self._store = store
        self._duration = duration
        self._loop = loop
        self._timer: Optional[asyncio.TimerHandle] = None
        self._highlighted: Dict[int, Tuple[RegisterKind, Entry]] = {}

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def is_running(self) -> bool:
        """Whether the shared clear timer is pending."""
        return self._timer is not None

    @property
    def highlighted(self) -> List[Entry]:
        """Entries currently in the highlight set."""
        return [entry for _, entry in self._highlighted.values()]

    def track(self, kind: RegisterKind, entries: List[Entry]) -> None:
        """Add entries to the highlight set and start the timer if idle.

        The entries are expected to already carry recently_modified; the
        store sets it in the same change set as their new value.
        """
        for entry in entries:
            self._highlighted[id(entry)] = (kind, entry)

        if entries and self._timer is None:
            loop = self._loop or asyncio.get_running_loop()
            self._timer = loop.call_later(self._duration, self.clear)
            _LOGGER.debug("Highlight timer started (%.1fs)", self._duration)

    def clear(self) -> List[ChangeSet]:
        """Clear every highlighted entry at once and stop the timer."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        by_kind: Dict[RegisterKind, List[Entry]] = {}
        for kind, entry in self._highlighted.values():
            if self._store.contains(kind, entry):
                by_kind.setdefault(kind, []).append(entry)
        self._highlighted.clear()

        emitted = [
            self._store.set_recently_modified(kind, entries, False)
            for kind, entries in by_kind.items()
        ]
        _LOGGER.debug(
            "Cleared highlight on %d entries", sum(len(e) for e in by_kind.values())
        )
        return emitted

    def cancel(self) -> None:
        """Stop the timer without clearing the flags."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
