from __future__ import annotations

from typing import Optional

from ..core.enums import AccountStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Profile, Team
from .repository import UserRepository


def _to_team(r: dict) -> Team:
    return Team(
        team_id=int(r["team_id"]),
        name=r["name"],
        leader_id=r.get("leader_id"),
        leader_2_id=r.get("leader_2_id"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_profile(self, user_id: int) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, first_name, last_name, team_id, account_status
                FROM profiles
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            try:
                status = AccountStatus(row.get("account_status") or AccountStatus.PENDING.value)
            except ValueError:
                status = AccountStatus.PENDING
            return Profile(
                user_id=int(row["user_id"]),
                first_name=row.get("first_name"),
                last_name=row.get("last_name"),
                team_id=row.get("team_id"),
                account_status=status,
            )

    def get_role(self, user_id: int) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM user_roles WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return row["role"] if row else None

    def get_team(self, team_id: int) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT team_id, name, leader_id, leader_2_id FROM teams WHERE team_id=%s",
                (int(team_id),),
            )
            row = fetchone(cur)
            return _to_team(row) if row else None

    def find_team_led_by(self, user_id: int) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT team_id, name, leader_id, leader_2_id
                FROM teams
                WHERE leader_id=%s OR leader_2_id=%s
                ORDER BY team_id
                LIMIT 1
                """,
                (int(user_id), int(user_id)),
            )
            row = fetchone(cur)
            return _to_team(row) if row else None

    def approve_and_assign_role(self, user_id: int, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE profiles SET account_status=%s WHERE user_id=%s",
                (AccountStatus.APPROVED.value, int(user_id)),
            )
            if cur.rowcount <= 0:
                return False
            cur.execute(
                """
                INSERT INTO user_roles(user_id, role) VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE role=VALUES(role)
                """,
                (int(user_id), role.value),
            )
            return True

    def set_account_status(self, user_id: int, status: AccountStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE profiles SET account_status=%s WHERE user_id=%s",
                (status.value, int(user_id)),
            )
            return cur.rowcount > 0
