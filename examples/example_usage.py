"""Ví dụ: dùng service layer (không qua Flask).

Controllers chỉ là lớp mỏng, nghiệp vụ nằm ở Services.
"""

import importlib

from config import get_settings_module

from src.shiftdesk.shiftdesk.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    container.notifier.subscribe(1, lambda uid: print("records changed for user", uid))
    print(container.attendance_service.monthly_stats(user_id=1))
    print(container.attendance_service.history(user_id=1, period="month"))


if __name__ == "__main__":
    main()
