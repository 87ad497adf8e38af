from __future__ import annotations

from enum import Enum

from .exceptions import InvalidRecord


class Role(str, Enum):
    """Vai trò người dùng dùng cho phân quyền."""

    ADMIN = "admin"
    HR = "hr"
    LEADER = "leader"
    STAFF = "staff"
    MEMBER = "member"
    GUEST = "guest"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        try:
            return cls(value)
        except ValueError:
            return cls.GUEST


class AccountStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class ShiftType(str, Enum):
    """Loại ca làm việc."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    OVERTIME = "overtime"

    @classmethod
    def parse(cls, value: str | None) -> "ShiftType":
        try:
            return cls(value)
        except ValueError:
            raise InvalidRecord(f"Loại ca không hợp lệ: {value!r}")


class ShiftStatus(str, Enum):
    """Trạng thái một bản ghi ca (lưu trong CSDL).

    UNKNOWN is never written; it stands in for values the store returns
    that this version does not recognise.
    """

    PENDING = "pending"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    ABSENT = "absent"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "ShiftStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class DayStatus(str, Enum):
    """Trạng thái gộp của một ngày làm việc."""

    COMPLETED = "completed"
    PENDING = "pending"
    ABSENT = "absent"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ColumnColor(str, Enum):
    BLUE = "blue"
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    PURPLE = "purple"
    PINK = "pink"
    GRAY = "gray"
    ORANGE = "orange"
    CYAN = "cyan"

    @classmethod
    def parse(cls, value: str | None) -> "ColumnColor":
        try:
            return cls(value)
        except ValueError:
            return cls.GRAY
