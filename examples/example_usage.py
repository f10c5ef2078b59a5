"""Example: drive the service layer directly, without Flask.

Controllers stay thin; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.attendance_ledger.attendance_ledger.container import build_container
from src.attendance_ledger.attendance_ledger.core.actor import Actor
from src.attendance_ledger.attendance_ledger.core.enums import Role


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    employee = Actor(employee_id=3, role=Role.EMPLOYEE)
    print(container.leave_service.balance(employee.employee_id).as_dict())
    for session in container.attendance_service.history(employee.employee_id, limit=5):
        print(session.work_date, session.status.value, session.worked_hours)


if __name__ == "__main__":
    main()
