"""State machines for managing complex state transitions."""

from .scan_state_machine import ScanEvent, ScanState, ScanStateMachine

__all__ = [
    "ScanStateMachine",
    "ScanState",
    "ScanEvent",
]
