from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .approvals.factory import ApprovalAuthorityFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .leave.accrual import CompensatoryAccrualRule
from .leave.balance_repository import AccrualRepository, LeaveBalanceRepository
from .leave.ledger import LeaveLedger
from .leave.mysql_balance_repository import MySQLAccrualRepository, MySQLLeaveBalanceRepository
from .leave.mysql_request_repository import MySQLLeaveRequestRepository
from .leave.request_repository import LeaveRequestRepository
from .leave.service import LeaveService
from .payroll.service import SalaryService
from .settings.mysql_settings_repository import MySQLSettingsRepository
from .settings.repository import SettingsRepository
from .settings.service import SettingsService


@dataclass(frozen=True)
class Container:
    employee_service: EmployeeService
    holiday_service: HolidayService
    settings_service: SettingsService
    ledger: LeaveLedger
    accrual_rule: CompensatoryAccrualRule
    attendance_service: AttendanceService
    leave_service: LeaveService
    salary_service: SalaryService
    authorities: ApprovalAuthorityFactory
    conn: Optional[DatabaseConnection] = None


def assemble(
    *,
    employees_repo: EmployeeRepository,
    holidays_repo: HolidayRepository,
    settings_repo: SettingsRepository,
    balances_repo: LeaveBalanceRepository,
    accruals_repo: AccrualRepository,
    attendance_repo: AttendanceRepository,
    leave_requests_repo: LeaveRequestRepository,
    strict_leave_accounting: bool = False,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, in-memory in tests)."""

    employee_service = EmployeeService(employees_repo)
    holiday_service = HolidayService(holidays_repo)
    settings_service = SettingsService(settings_repo)
    ledger = LeaveLedger(balances_repo)
    accrual_rule = CompensatoryAccrualRule(holidays_repo, ledger, accruals_repo)
    attendance_service = AttendanceService(attendance_repo, accrual=accrual_rule)
    leave_service = LeaveService(leave_requests_repo, ledger, strict_accounting=strict_leave_accounting)
    salary_service = SalaryService(attendance_service, employee_service)
    authorities = ApprovalAuthorityFactory(
        attendance=attendance_service,
        leaves=leave_service,
        employees=employee_service,
        holidays=holiday_service,
        settings=settings_service,
    )

    return Container(
        employee_service=employee_service,
        holiday_service=holiday_service,
        settings_service=settings_service,
        ledger=ledger,
        accrual_rule=accrual_rule,
        attendance_service=attendance_service,
        leave_service=leave_service,
        salary_service=salary_service,
        authorities=authorities,
        conn=conn,
    )


def build_container(*, db_config: dict, strict_leave_accounting: bool = False) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        employees_repo=MySQLEmployeeRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        settings_repo=MySQLSettingsRepository(conn),
        balances_repo=MySQLLeaveBalanceRepository(conn),
        accruals_repo=MySQLAccrualRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leave_requests_repo=MySQLLeaveRequestRepository(conn),
        strict_leave_accounting=strict_leave_accounting,
        conn=conn,
    )
