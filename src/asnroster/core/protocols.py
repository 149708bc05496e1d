"""Protocol interfaces for the engine's external collaborators.

The engine only depends on these Protocols: structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from asnroster.models.employee import EmployeeRecord


# ---------------------------------------------------------------------------
# Roster storage
# ---------------------------------------------------------------------------

@runtime_checkable
class IRosterSource(Protocol):
    """Supplies the current roster snapshot (database, API, fixture...)."""

    def list_employees(self) -> list[EmployeeRecord]: ...
