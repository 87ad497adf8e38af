from __future__ import annotations

from typing import Iterable

from ..core.enums import Role
from ..core.exceptions import AuthorizationError

REGISTRATION_APPROVERS = frozenset({Role.ADMIN, Role.HR})
BOARD_EDITORS = frozenset({Role.ADMIN, Role.HR, Role.LEADER, Role.STAFF, Role.MEMBER})


def require_role(current_role: Role, allowed: Iterable[Role]) -> Role:
    if current_role not in set(allowed):
        raise AuthorizationError("Bạn không có quyền")
    return current_role
