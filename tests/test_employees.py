"""Employee and department test suite — creation, uniqueness, status changes,
search/filter pagination, and the HTTP API.

Tests exercise the service layer and the HTTP API (via router).
Uses the shared conftest.py pattern with in-memory SQLite.
"""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from hr_attendance.common.constants import EmployeeGroup, EmployeeStatus
from hr_attendance.common.exceptions import ConflictError, NotFoundException
from hr_attendance.core_hr.models import Department, Employee
from hr_attendance.core_hr.schemas import DepartmentCreate, EmployeeCreate
from hr_attendance.core_hr.service import DepartmentService, EmployeeService
from tests.conftest import _make_department, _make_employee


# ── Helpers ─────────────────────────────────────────────────────────


async def _seed_department(db: AsyncSession, **kwargs) -> Department:
    dept = Department(**_make_department(**kwargs))
    db.add(dept)
    await db.flush()
    return dept


async def _seed_employee(db: AsyncSession, **kwargs) -> Employee:
    emp = Employee(**_make_employee(**kwargs))
    db.add(emp)
    await db.flush()
    return emp


def _employee_payload(**overrides) -> EmployeeCreate:
    data = dict(
        employee_code="EMP-001",
        full_name="Priya Raman",
        email="priya@example.com",
        employee_group=EmployeeGroup.group_a,
        join_date=date(2024, 4, 1),
    )
    data.update(overrides)
    return EmployeeCreate(**data)


# ═════════════════════════════════════════════════════════════════════
# 1. DEPARTMENTS
# ═════════════════════════════════════════════════════════════════════


class TestDepartments:

    async def test_create_and_list(self, db: AsyncSession):
        await DepartmentService.create_department(
            db, DepartmentCreate(name="Operations", code="OPS"),
        )
        await _seed_department(db, name="Archive", code="ARC")
        archived = await _seed_department(db, name="Legacy", code="LEG")
        archived.is_active = False
        await db.flush()

        active = await DepartmentService.list_departments(db)
        everything = await DepartmentService.list_departments(db, is_active=None)

        assert [d.name for d in active] == ["Archive", "Operations"]
        assert len(everything) == 3

    async def test_duplicate_name_conflict(self, db: AsyncSession):
        await _seed_department(db, name="Operations", code="OPS")

        with pytest.raises(ConflictError):
            await DepartmentService.create_department(
                db, DepartmentCreate(name="Operations", code="OP2"),
            )

    async def test_duplicate_code_conflict(self, db: AsyncSession):
        await _seed_department(db, name="Operations", code="OPS")

        with pytest.raises(ConflictError):
            await DepartmentService.create_department(
                db, DepartmentCreate(name="Ops Two", code="OPS"),
            )


# ═════════════════════════════════════════════════════════════════════
# 2. EMPLOYEE CREATION
# ═════════════════════════════════════════════════════════════════════


class TestEmployeeCreate:

    async def test_create_employee(self, db: AsyncSession):
        dept = await _seed_department(db)

        out = await EmployeeService.create_employee(
            db, _employee_payload(department_id=dept.id),
        )

        assert out.employee_code == "EMP-001"
        assert out.status == EmployeeStatus.active
        assert out.department_name == "Engineering"

    async def test_create_without_department(self, db: AsyncSession):
        out = await EmployeeService.create_employee(db, _employee_payload())

        assert out.department_id is None
        assert out.department_name is None

    async def test_duplicate_code_conflict(self, db: AsyncSession):
        await EmployeeService.create_employee(db, _employee_payload())

        with pytest.raises(ConflictError):
            await EmployeeService.create_employee(
                db, _employee_payload(email="other@example.com"),
            )

    async def test_duplicate_email_conflict(self, db: AsyncSession):
        await EmployeeService.create_employee(db, _employee_payload())

        with pytest.raises(ConflictError):
            await EmployeeService.create_employee(
                db, _employee_payload(employee_code="EMP-002"),
            )

    async def test_unknown_department(self, db: AsyncSession):
        with pytest.raises(NotFoundException):
            await EmployeeService.create_employee(
                db, _employee_payload(department_id=uuid.uuid4()),
            )

    def test_camel_case_aliases(self):
        payload = EmployeeCreate(
            employeeId="EMP-9",
            fullName="Camel Case",
            group="group_b",
            joinDate="2024-02-01",
        )
        assert payload.employee_code == "EMP-9"
        assert payload.employee_group == EmployeeGroup.group_b


# ═════════════════════════════════════════════════════════════════════
# 3. STATUS & LOOKUP
# ═════════════════════════════════════════════════════════════════════


class TestEmployeeStatus:

    async def test_deactivate(self, db: AsyncSession):
        emp = await _seed_employee(db)

        out = await EmployeeService.update_status(db, emp.id, EmployeeStatus.inactive)

        assert out.status == EmployeeStatus.inactive
        active = await EmployeeService.get_active_employees(db)
        assert emp.id not in {e.id for e in active}

    async def test_get_active_employees_single(self, db: AsyncSession):
        emp = await _seed_employee(db)
        await _seed_employee(db)

        active = await EmployeeService.get_active_employees(db, employee_id=emp.id)

        assert [e.id for e in active] == [emp.id]

    async def test_get_unknown(self, db: AsyncSession):
        with pytest.raises(NotFoundException):
            await EmployeeService.get_employee(db, uuid.uuid4())


# ═════════════════════════════════════════════════════════════════════
# 4. API
# ═════════════════════════════════════════════════════════════════════


class TestEmployeeAPI:

    async def test_create_and_fetch(self, client, test_department):
        resp = await client.post(
            "/api/employees",
            json={
                "employeeId": "EMP-100",
                "fullName": "Nadia Khan",
                "email": "nadia@example.com",
                "departmentId": str(test_department["id"]),
                "group": "group_b",
                "joinDate": "2024-05-01",
            },
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["employee_group"] == "group_b"
        assert body["department_name"] == "Engineering"

        resp = await client.get(f"/api/employees/{body['id']}")
        assert resp.status_code == 200
        assert resp.json()["full_name"] == "Nadia Khan"

    async def test_duplicate_code_409(self, client, test_employee):
        resp = await client.post(
            "/api/employees",
            json={
                "employee_code": test_employee["employee_code"],
                "full_name": "Dup",
                "join_date": "2024-05-01",
            },
        )

        assert resp.status_code == 409
        assert resp.json()["errors"]["employee_code"]

    async def test_list_with_filters(self, client, db: AsyncSession):
        await _seed_employee(db, full_name="Alice Ng", employee_group=EmployeeGroup.group_a)
        await _seed_employee(db, full_name="Bob Ito", employee_group=EmployeeGroup.group_b)
        await _seed_employee(
            db, full_name="Alina Cruz", status=EmployeeStatus.inactive,
        )
        await db.commit()

        resp = await client.get("/api/employees", params={"search": "ali"})
        assert resp.status_code == 200
        assert resp.json()["meta"]["total"] == 2

        resp = await client.get(
            "/api/employees", params={"status": "active", "group": "group_b"},
        )
        assert [e["full_name"] for e in resp.json()["data"]] == ["Bob Ito"]

    async def test_status_endpoint(self, client, test_employee):
        resp = await client.put(
            f"/api/employees/{test_employee['id']}/status",
            json={"status": "inactive"},
        )

        assert resp.status_code == 200
        assert resp.json()["status"] == "inactive"

    async def test_departments_endpoints(self, client):
        resp = await client.post(
            "/api/departments", json={"name": "People Ops", "code": "PPL"},
        )
        assert resp.status_code == 201

        resp = await client.get("/api/departments")
        assert [d["code"] for d in resp.json()] == ["PPL"]
