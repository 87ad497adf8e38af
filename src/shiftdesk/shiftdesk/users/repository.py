from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import AccountStatus, Role
from .model import Profile, Team


class UserRepository(Protocol):
    """Giao diện repository cho hồ sơ, vai trò và nhóm.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_profile(self, user_id: int) -> Optional[Profile]:
        raise NotImplementedError

    def get_role(self, user_id: int) -> Optional[str]:
        """Raw role value from the user_roles table, None when unassigned."""

        raise NotImplementedError

    def get_team(self, team_id: int) -> Optional[Team]:
        raise NotImplementedError

    def find_team_led_by(self, user_id: int) -> Optional[Team]:
        raise NotImplementedError

    def approve_and_assign_role(self, user_id: int, role: Role) -> bool:
        """Set account status APPROVED and the role in one transaction."""

        raise NotImplementedError

    def set_account_status(self, user_id: int, status: AccountStatus) -> bool:
        raise NotImplementedError
