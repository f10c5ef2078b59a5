from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        full_name: str,
        email: str,
        role: Role,
        manager_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def set_manager(self, employee_ids: Sequence[int], manager_id: Optional[int]) -> int:
        """Returns the number of rows updated."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def list_direct_reports(self, manager_id: int) -> Sequence[int]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
