from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    present_today: int
    pending_leaves: int
    pending_attendance: int

    def as_dict(self) -> dict:
        return asdict(self)
