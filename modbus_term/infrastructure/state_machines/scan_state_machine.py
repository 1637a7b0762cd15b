"""Device scan state machine for explicit state management."""

import logging
from enum import Enum, auto
from typing import Callable, Dict, Optional

_LOGGER = logging.getLogger(__name__)


class ScanState(Enum):
    """Device scan states."""

    IDLE = auto()
    SCANNING = auto()
    CANCELLING = auto()


class ScanEvent(Enum):
    """Scan events that trigger state transitions."""

    START = auto()
    CANCEL = auto()
    FINISHED = auto()


class ScanStateMachine:
    """State machine for the device scan lifecycle.

    Valid transitions:
        IDLE -> SCANNING (on START)
        SCANNING -> CANCELLING (on CANCEL)
        SCANNING -> IDLE (on FINISHED)
        CANCELLING -> IDLE (on FINISHED)

    A START while SCANNING or CANCELLING is not a valid transition, which
    is how a second concurrent scan is rejected.

    Example:
        >>> sm = ScanStateMachine()
        >>> sm.transition(ScanEvent.START)
        True
        >>> sm.transition(ScanEvent.START)
        False
        >>> sm.transition(ScanEvent.CANCEL)
        True
        >>> sm.state
        <ScanState.CANCELLING: 3>
    """

    def __init__(self):
        """Initialize state machine in IDLE state."""
        self._state = ScanState.IDLE
        self._previous_state: Optional[ScanState] = None

        # Callbacks for state entry
        self._on_state_change: Dict[ScanState, Callable] = {}

        # Valid transitions: (current_state, event) -> new_state
        self._transitions = {
            (ScanState.IDLE, ScanEvent.START): ScanState.SCANNING,
            (ScanState.SCANNING, ScanEvent.CANCEL): ScanState.CANCELLING,
            (ScanState.SCANNING, ScanEvent.FINISHED): ScanState.IDLE,
            (ScanState.CANCELLING, ScanEvent.FINISHED): ScanState.IDLE,
        }

    @property
    def state(self) -> ScanState:
        """Get current state."""
        return self._state

    @property
    def previous_state(self) -> Optional[ScanState]:
        """State before the last transition."""
        return self._previous_state

    @property
    def is_idle(self) -> bool:
        return self._state == ScanState.IDLE

    @property
    def is_active(self) -> bool:
        """Check if a scan loop is running (including while cancelling)."""
        return self._state in (ScanState.SCANNING, ScanState.CANCELLING)

    @property
    def is_cancelling(self) -> bool:
        return self._state == ScanState.CANCELLING

    def transition(self, event: ScanEvent) -> bool:
        """Attempt state transition.

        Args:
            event: Event triggering transition

        Returns:
            True if transition valid and executed, False otherwise
        """
        key = (self._state, event)

        if key not in self._transitions:
            _LOGGER.debug(
                "Invalid scan transition: %s + %s",
                self._state.name,
                event.name,
            )
            return False

        self._change_state(self._transitions[key], event)
        return True

    def _change_state(self, new_state: ScanState, event: ScanEvent):
        self._previous_state = self._state
        self._state = new_state

        _LOGGER.debug(
            "Scan state: %s -> %s (event: %s)",
            self._previous_state.name,
            new_state.name,
            event.name,
        )

        if new_state in self._on_state_change:
            try:
                self._on_state_change[new_state]()
            except Exception as err:
                _LOGGER.error("Error in scan state callback: %s", err)

    def on_state(self, state: ScanState, callback: Callable):
        """Register callback for state entry.

        Args:
            state: State to watch
            callback: Function to call on state entry (no args)
        """
        self._on_state_change[state] = callback

    def reset(self):
        """Reset to initial IDLE state."""
        self._state = ScanState.IDLE
        self._previous_state = None

    def __str__(self) -> str:
        return f"ScanStateMachine(state={self._state.name})"

    def __repr__(self) -> str:
        return f"ScanStateMachine(state={self._state!r}, previous={self._previous_state!r})"
