"""Core HR service layer — async CRUD for departments and employees.

Uses:
  - ``paginate()`` from hr_attendance.common.pagination
  - ``apply_filters`` from hr_attendance.common.filters
  - ``NotFoundException / ConflictError`` from hr_attendance.common.exceptions
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_attendance.common.constants import EmployeeGroup, EmployeeStatus
from hr_attendance.common.exceptions import ConflictError, NotFoundException
from hr_attendance.common.filters import apply_filters
from hr_attendance.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_attendance.core_hr.models import Department, Employee
from hr_attendance.core_hr.schemas import (
    DepartmentCreate,
    DepartmentResponse,
    EmployeeCreate,
    EmployeeResponse,
)

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# DepartmentService
# ═════════════════════════════════════════════════════════════════════


class DepartmentService:
    """Async operations for departments."""

    @staticmethod
    async def list_departments(
        db: AsyncSession,
        *,
        is_active: Optional[bool] = True,
    ) -> list[DepartmentResponse]:
        query = select(Department).order_by(Department.name)
        if is_active is not None:
            query = query.where(Department.is_active.is_(is_active))
        result = await db.execute(query)
        return [DepartmentResponse.model_validate(d) for d in result.scalars().all()]

    @staticmethod
    async def create_department(
        db: AsyncSession,
        data: DepartmentCreate,
    ) -> DepartmentResponse:
        """Create a department; name and code must be unique."""

        existing = await db.execute(
            select(Department.id).where(Department.name == data.name)
        )
        if existing.scalar() is not None:
            raise ConflictError("name", data.name)

        if data.code:
            existing = await db.execute(
                select(Department.id).where(Department.code == data.code)
            )
            if existing.scalar() is not None:
                raise ConflictError("code", data.code)

        dept = Department(name=data.name, code=data.code, is_active=True)
        db.add(dept)
        await db.flush()
        logger.info("Created department %s (%s)", dept.name, dept.id)
        return DepartmentResponse.model_validate(dept)


# ═════════════════════════════════════════════════════════════════════
# EmployeeService
# ═════════════════════════════════════════════════════════════════════


class EmployeeService:
    """Async CRUD operations for employees."""

    # ── Lookup helpers (shared with attendance / leave) ─────────────

    @staticmethod
    async def get_employee_or_404(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> Employee:
        """Load an employee with its department, or raise NotFoundException."""

        result = await db.execute(
            select(Employee)
            .where(Employee.id == employee_id)
            .options(selectinload(Employee.department))
        )
        employee = result.scalars().first()
        if employee is None:
            raise NotFoundException("Employee", str(employee_id))
        return employee

    @staticmethod
    async def get_active_employees(
        db: AsyncSession,
        *,
        employee_id: Optional[uuid.UUID] = None,
    ) -> list[Employee]:
        """Return active employees, optionally narrowed to a single one."""

        query = (
            select(Employee)
            .where(Employee.status == EmployeeStatus.active)
            .order_by(Employee.employee_code)
        )
        if employee_id is not None:
            query = query.where(Employee.id == employee_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    # ── List (paginated, filterable) ────────────────────────────────

    @staticmethod
    async def list_employees(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        search: Optional[str] = None,
        department_id: Optional[uuid.UUID] = None,
        status: Optional[EmployeeStatus] = None,
        employee_group: Optional[EmployeeGroup] = None,
    ) -> PaginatedResponse:
        """Return a paginated, filtered employee list."""

        query = select(Employee).options(selectinload(Employee.department))

        filters: dict[str, Any] = {
            "department_id": department_id,
            "status": status,
            "employee_group": employee_group,
            "full_name__ilike": search,
        }
        query = apply_filters(query, Employee, filters)
        if not pagination.sort:
            query = query.order_by(Employee.employee_code)

        return await paginate(
            db,
            query,
            pagination,
            model=Employee,
            transform=EmployeeResponse.model_validate,
        )

    # ── Get single ──────────────────────────────────────────────────

    @staticmethod
    async def get_employee(
        db: AsyncSession,
        employee_id: uuid.UUID,
    ) -> EmployeeResponse:
        employee = await EmployeeService.get_employee_or_404(db, employee_id)
        return EmployeeResponse.model_validate(employee)

    # ── Create ──────────────────────────────────────────────────────

    @staticmethod
    async def create_employee(
        db: AsyncSession,
        data: EmployeeCreate,
    ) -> EmployeeResponse:
        """Create an employee; ``employee_code`` and ``email`` must be unique."""

        existing = await db.execute(
            select(Employee.id).where(Employee.employee_code == data.employee_code)
        )
        if existing.scalar() is not None:
            raise ConflictError("employee_code", data.employee_code)

        if data.email:
            existing = await db.execute(
                select(Employee.id).where(Employee.email == data.email)
            )
            if existing.scalar() is not None:
                raise ConflictError("email", data.email)

        if data.department_id is not None:
            dept = await db.execute(
                select(Department.id).where(Department.id == data.department_id)
            )
            if dept.scalar() is None:
                raise NotFoundException("Department", str(data.department_id))

        employee = Employee(
            employee_code=data.employee_code,
            full_name=data.full_name,
            email=data.email,
            department_id=data.department_id,
            employee_group=data.employee_group,
            status=data.status,
            join_date=data.join_date,
        )
        db.add(employee)
        await db.flush()
        await db.refresh(employee, attribute_names=["department"])
        logger.info("Created employee %s (%s)", employee.employee_code, employee.id)

        return EmployeeResponse.model_validate(employee)

    # ── Status change ───────────────────────────────────────────────

    @staticmethod
    async def update_status(
        db: AsyncSession,
        employee_id: uuid.UUID,
        status: EmployeeStatus,
    ) -> EmployeeResponse:
        """Activate or deactivate an employee. Inactive employees are never
        considered by the automatic deduction run."""

        employee = await EmployeeService.get_employee_or_404(db, employee_id)
        if employee.status != status:
            logger.info(
                "Employee %s status %s -> %s",
                employee.employee_code, employee.status.value, status.value,
            )
            employee.status = status
            employee.updated_at = datetime.now(timezone.utc)
            await db.flush()
        return EmployeeResponse.model_validate(employee)
