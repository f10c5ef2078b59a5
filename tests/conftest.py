from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from src.attendance_ledger.attendance_ledger.attendance.model import AttendanceSession
from src.attendance_ledger.attendance_ledger.container import assemble
from src.attendance_ledger.attendance_ledger.core.actor import Actor
from src.attendance_ledger.attendance_ledger.core.enums import ApprovalStatus, LeaveCategory, Role
from src.attendance_ledger.attendance_ledger.core.exceptions import ConflictError
from src.attendance_ledger.attendance_ledger.employees.model import Employee
from src.attendance_ledger.attendance_ledger.holidays.model import Holiday
from src.attendance_ledger.attendance_ledger.leave.model import LeaveBalance, LeaveRequest


class FakeEmployeesRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Employee] = {}

    def add(self, full_name, role=Role.EMPLOYEE, manager_id=None) -> Employee:
        email = f"{full_name.lower().replace(' ', '.')}@example.com"
        employee_id = self.create(full_name=full_name, email=email, role=Role(role), manager_id=manager_id)
        return self.rows[employee_id]

    def get_by_id(self, employee_id):
        return self.rows.get(int(employee_id))

    def get_by_email(self, email):
        return next((e for e in self.rows.values() if e.email == email), None)

    def create(self, *, full_name, email, role, manager_id=None):
        employee_id = self._next_id
        self._next_id += 1
        self.rows[employee_id] = Employee(
            employee_id=employee_id,
            full_name=full_name,
            email=email,
            role=role,
            manager_id=manager_id,
        )
        return employee_id

    def set_manager(self, employee_ids, manager_id):
        for employee_id in employee_ids:
            self.rows[int(employee_id)] = replace(self.rows[int(employee_id)], manager_id=manager_id)
        return len(employee_ids)

    def list_all(self):
        return sorted(self.rows.values(), key=lambda e: e.full_name)

    def list_direct_reports(self, manager_id):
        return [e.employee_id for e in self.rows.values() if e.manager_id == int(manager_id)]

    def count(self):
        return len(self.rows)


class FakeHolidaysRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Holiday] = {}

    def get_by_date(self, holiday_date):
        return next((h for h in self.rows.values() if h.holiday_date == holiday_date), None)

    def list_between(self, *, start_date=None, end_date=None):
        rows = [
            h
            for h in self.rows.values()
            if (start_date is None or h.holiday_date >= start_date) and (end_date is None or h.holiday_date <= end_date)
        ]
        return sorted(rows, key=lambda h: h.holiday_date)

    def create(self, *, holiday_date, name, description=None):
        holiday_id = self._next_id
        self._next_id += 1
        self.rows[holiday_id] = Holiday(holiday_id=holiday_id, holiday_date=holiday_date, name=name, description=description)
        return holiday_id

    def delete(self, holiday_id):
        return self.rows.pop(int(holiday_id), None) is not None


class FakeSettingsRepo:
    def __init__(self):
        self.saved = None

    def get(self):
        return self.saved

    def save(self, settings):
        self.saved = settings


class FakeBalancesRepo:
    def __init__(self):
        self.rows: dict[int, LeaveBalance] = {}

    def get(self, employee_id):
        return self.rows.get(int(employee_id))

    def create_if_missing(self, employee_id, allotment):
        self.rows.setdefault(int(employee_id), LeaveBalance(employee_id=int(employee_id), **allotment))

    def adjust(self, employee_id, category, delta):
        balance = self.rows.get(int(employee_id))
        if balance is None or balance.available_for(category) + delta < 0:
            return False
        field = LeaveCategory(category).value
        self.rows[int(employee_id)] = replace(balance, **{field: getattr(balance, field) + delta})
        return True


class FakeAccrualsRepo:
    def __init__(self):
        self.keys: set = set()

    def claim(self, employee_id, work_date):
        key = (int(employee_id), work_date)
        if key in self.keys:
            return False
        self.keys.add(key)
        return True

    def release(self, employee_id, work_date):
        self.keys.discard((int(employee_id), work_date))


class FakeAttendanceRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, AttendanceSession] = {}

    def get(self, session_id):
        return self.rows.get(int(session_id))

    def find_open(self, employee_id, work_date, *, status=None):
        for s in self.rows.values():
            if s.employee_id == int(employee_id) and s.is_open and s.work_date == work_date:
                if status is None or s.status == status:
                    return s
        return None

    def create(self, *, employee_id, signin_time, signin_location, signin_photo_ref, status, approved_by=None, approved_at=None):
        if self.find_open(employee_id, signin_time.date()):
            raise ConflictError("open session already exists")
        session_id = self._next_id
        self._next_id += 1
        self.rows[session_id] = AttendanceSession(
            session_id=session_id,
            employee_id=int(employee_id),
            signin_time=signin_time,
            status=status,
            signin_location=signin_location,
            signin_photo_ref=signin_photo_ref,
            approved_by=approved_by,
            approved_at=approved_at,
        )
        return session_id

    def close(self, *, session_id, signout_time, signout_location, approved_by=None):
        s = self.rows.get(int(session_id))
        if not s or not s.is_open:
            return False
        self.rows[s.session_id] = replace(
            s,
            signout_time=signout_time,
            signout_location=signout_location,
            approved_by=approved_by if approved_by is not None else s.approved_by,
        )
        return True

    def decide(self, *, session_id, status, approved_by, approved_at):
        s = self.rows.get(int(session_id))
        if not s or s.status != ApprovalStatus.PENDING:
            return False
        self.rows[s.session_id] = replace(s, status=status, approved_by=approved_by, approved_at=approved_at)
        return True

    def list_recent_for_employee(self, employee_id, limit):
        rows = [s for s in self.rows.values() if s.employee_id == int(employee_id)]
        return sorted(rows, key=lambda s: s.signin_time, reverse=True)[:limit]

    def list_by_status(self, status, *, employee_ids=None, limit=500):
        ids = None if employee_ids is None else {int(i) for i in employee_ids}
        rows = [s for s in self.rows.values() if s.status == status and (ids is None or s.employee_id in ids)]
        return sorted(rows, key=lambda s: s.signin_time, reverse=True)[:limit]

    def list_recent(self, *, employee_ids=None, limit=100):
        ids = None if employee_ids is None else {int(i) for i in employee_ids}
        rows = [s for s in self.rows.values() if ids is None or s.employee_id in ids]
        return sorted(rows, key=lambda s: s.signin_time, reverse=True)[:limit]

    def list_for_range(self, *, employee_id, start_date, end_date, status=None):
        rows = [
            s
            for s in self.rows.values()
            if s.employee_id == int(employee_id)
            and start_date <= s.work_date <= end_date
            and (status is None or s.status == status)
        ]
        return sorted(rows, key=lambda s: s.signin_time)

    def count_by_status(self, status):
        return sum(1 for s in self.rows.values() if s.status == status)

    def count_open_on(self, work_date):
        return sum(1 for s in self.rows.values() if s.is_open and s.work_date == work_date)


class FakeLeaveRequestsRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, LeaveRequest] = {}

    def create(self, *, employee_id, category, start_date, end_date, reason, document_ref, applied_at):
        request_id = self._next_id
        self._next_id += 1
        self.rows[request_id] = LeaveRequest(
            request_id=request_id,
            employee_id=int(employee_id),
            category=LeaveCategory(category),
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=ApprovalStatus.PENDING,
            applied_at=applied_at,
            document_ref=document_ref,
        )
        return request_id

    def get(self, request_id):
        return self.rows.get(int(request_id))

    def list_for_employee(self, employee_id, *, limit=200):
        rows = [r for r in self.rows.values() if r.employee_id == int(employee_id)]
        return sorted(rows, key=lambda r: r.applied_at, reverse=True)[:limit]

    def list_by_status(self, status, *, employee_ids=None, limit=500):
        ids = None if employee_ids is None else {int(i) for i in employee_ids}
        rows = [r for r in self.rows.values() if r.status == status and (ids is None or r.employee_id in ids)]
        return sorted(rows, key=lambda r: r.applied_at, reverse=True)[:limit]

    def decide(self, *, request_id, status, approved_by, approved_at):
        r = self.rows.get(int(request_id))
        if not r or r.status != ApprovalStatus.PENDING:
            return False
        self.rows[r.request_id] = replace(r, status=status, approved_by=approved_by, approved_at=approved_at)
        return True

    def count_by_status(self, status):
        return sum(1 for r in self.rows.values() if r.status == status)


@pytest.fixture
def fixed_now():
    return datetime(2026, 1, 5, 9, 0, 0)


@pytest.fixture
def repos():
    class Repos:
        employees = FakeEmployeesRepo()
        holidays = FakeHolidaysRepo()
        settings = FakeSettingsRepo()
        balances = FakeBalancesRepo()
        accruals = FakeAccrualsRepo()
        attendance = FakeAttendanceRepo()
        leave_requests = FakeLeaveRequestsRepo()

    return Repos()


def build(repos, *, strict_leave_accounting=False):
    return assemble(
        employees_repo=repos.employees,
        holidays_repo=repos.holidays,
        settings_repo=repos.settings,
        balances_repo=repos.balances,
        accruals_repo=repos.accruals,
        attendance_repo=repos.attendance,
        leave_requests_repo=repos.leave_requests,
        strict_leave_accounting=strict_leave_accounting,
    )


@pytest.fixture
def container(repos):
    return build(repos)


@pytest.fixture
def strict_container(repos):
    return build(repos, strict_leave_accounting=True)


@pytest.fixture
def staff(repos):
    """admin -> manager -> (alice, bob); carol reports to nobody."""

    admin = repos.employees.add("Ada Admin", Role.ADMIN)
    manager = repos.employees.add("Max Manager", Role.MANAGER, manager_id=admin.employee_id)
    alice = repos.employees.add("Alice Staff", manager_id=manager.employee_id)
    bob = repos.employees.add("Bob Staff", manager_id=manager.employee_id)
    carol = repos.employees.add("Carol Staff")

    def actor(e):
        return Actor(employee_id=e.employee_id, role=e.role)

    class Staff:
        pass

    s = Staff()
    for name, e in (("admin", admin), ("manager", manager), ("alice", alice), ("bob", bob), ("carol", carol)):
        setattr(s, name, actor(e))
    return s


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.attendance_ledger.attendance_ledger.main import create_app

    app = create_app(container=container)
    return app.test_client()
