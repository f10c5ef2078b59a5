from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an enrolled employee.

    Note: Plain data object; `manager_id` points at another Employee and the
    hierarchy is expected (not enforced) to be acyclic.
    """

    employee_id: int
    full_name: str
    email: str
    role: Role
    manager_id: Optional[int] = None
    created_at: Optional[datetime] = None
