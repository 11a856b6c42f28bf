"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the chamada rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.school_admin.school_admin.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    calls = container.attendance_service.history_calls(
        shift="Manhã",
        start=date(2023, 10, 1),
        end=date(2023, 10, 31),
    )
    for call in calls:
        print(call.date, call.shift, f"P={call.present} A={call.absent} J={call.justified} total={call.total}")


if __name__ == "__main__":
    main()
