"""Use cases for the ModbusTerm core.

Use cases represent application-specific business rules.
They orchestrate the flow of data to and from entities,
and direct entities to use their business rules.

Each use case should:
- Have a single public entry point (execute)
- Return output via data structures (DTOs)
- Coordinate domain entities and services
- Be independent of frameworks

One class per file.
"""

from .execute_request_result import ExecuteRequestResult
from .execute_request_use_case import ExecuteRequestUseCase

__all__ = [
    "ExecuteRequestResult",
    "ExecuteRequestUseCase",
]
