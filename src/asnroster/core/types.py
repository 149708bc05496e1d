"""Type aliases used across the roster engine."""

from __future__ import annotations

EmployeeId = str
TallyName = str
