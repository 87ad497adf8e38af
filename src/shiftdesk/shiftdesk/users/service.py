from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import AccountStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import Profile, Team
from .permissions import REGISTRATION_APPROVERS, require_role
from .repository import UserRepository

logger = logging.getLogger(__name__)


class UserDirectoryService:
    """Use case: tra cứu vai trò/nhóm và duyệt đăng ký tài khoản."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: int) -> Optional[Profile]:
        return self._users.get_profile(user_id)

    def get_user_role(self, user_id: int) -> Role:
        """Role of the user; unassigned or unknown roles count as guest."""

        return Role.parse(self._users.get_role(user_id))

    def get_user_team(self, user_id: int) -> Optional[Team]:
        """The profile's team, else a team the user leads, else None."""

        profile = self._users.get_profile(user_id)
        if profile and profile.team_id:
            return self._users.get_team(profile.team_id)
        return self._users.find_team_led_by(user_id)

    def approve_registration(self, *, current_role: Role, user_id: int, role: Role = Role.STAFF) -> None:
        require_role(current_role, REGISTRATION_APPROVERS)
        if role == Role.GUEST:
            raise ValidationError("Vai trò không hợp lệ")
        if role == Role.ADMIN and current_role != Role.ADMIN:
            raise ValidationError("Chỉ Admin mới có thể cấp quyền Admin")

        if not self._users.approve_and_assign_role(user_id, role):
            raise NotFoundError("Người dùng không tồn tại")
        logger.info("registration approved user_id=%s role=%s", user_id, role.value)

    def reject_registration(self, *, current_role: Role, user_id: int) -> None:
        require_role(current_role, REGISTRATION_APPROVERS)
        if not self._users.set_account_status(user_id, AccountStatus.REJECTED):
            raise NotFoundError("Người dùng không tồn tại")
        logger.info("registration rejected user_id=%s", user_id)
