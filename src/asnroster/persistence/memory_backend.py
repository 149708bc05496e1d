"""In-memory roster source for unit tests and embedding callers."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from asnroster.models.employee import EmployeeRecord


class MemoryRosterSource:
    """List-backed IRosterSource holding one roster snapshot."""

    def __init__(self, employees: Iterable[EmployeeRecord | Mapping[str, Any]] = ()) -> None:
        self._employees: list[EmployeeRecord] = []
        for employee in employees:
            self.add(employee)

    def add(self, employee: EmployeeRecord | Mapping[str, Any]) -> EmployeeRecord:
        if not isinstance(employee, EmployeeRecord):
            employee = EmployeeRecord.model_validate(dict(employee))
        self._employees.append(employee)
        return employee

    def list_employees(self) -> list[EmployeeRecord]:
        return list(self._employees)
