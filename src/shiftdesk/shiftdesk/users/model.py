from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AccountStatus


@dataclass(frozen=True)
class Profile:
    """Thực thể miền (domain): Hồ sơ người dùng.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    user_id: int
    first_name: Optional[str]
    last_name: Optional[str]
    team_id: Optional[int]
    account_status: AccountStatus = AccountStatus.PENDING

    @property
    def display_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p) or f"User {self.user_id}"


@dataclass(frozen=True)
class Team:
    team_id: int
    name: str
    leader_id: Optional[int] = None
    leader_2_id: Optional[int] = None
