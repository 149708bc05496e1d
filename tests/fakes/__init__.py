"""Shared test doubles — in-memory roster source and record builder."""

from __future__ import annotations

from datetime import date
from typing import Any

from asnroster.models.employee import EmployeeRecord
from asnroster.persistence.memory_backend import MemoryRosterSource

_counter = 0


def make_employee(**overrides: Any) -> EmployeeRecord:
    """EmployeeRecord with sensible defaults; any field can be overridden."""
    global _counter
    _counter += 1
    fields: dict[str, Any] = {
        "id": f"emp-{_counter}",
        "name": f"Pegawai {_counter}",
        "birth_date": date(1980, 6, 15),
        "gender": "male",
        "employee_type": "pns",
        "position": "",
        "rank": "",
        "education_level": "s1",
        "work_unit": "Sekretariat",
    }
    fields.update(overrides)
    return EmployeeRecord(**fields)


__all__ = ["MemoryRosterSource", "make_employee"]
