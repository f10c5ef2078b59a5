from __future__ import annotations

from dataclasses import dataclass

from .enums import APPROVER_ROLES, Role
from .exceptions import AuthorizationError


@dataclass(frozen=True)
class Actor:
    """The caller of an operation, as supplied by the identity provider.

    The engine trusts this value; authentication happens upstream.
    """

    employee_id: int
    role: Role

    @property
    def is_approver(self) -> bool:
        return self.role in APPROVER_ROLES

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def require_approver(actor: Actor) -> None:
    if not actor.is_approver:
        raise AuthorizationError("Only managers and admins can approve requests")


def require_admin(actor: Actor) -> None:
    if not actor.is_admin:
        raise AuthorizationError("Only admins can perform this action")
