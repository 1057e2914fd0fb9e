"""Core HR router — Department and Employee API endpoints.

Routes:
    /employees              — List, create employees
    /employees/{id}         — Employee detail
    /employees/{id}/status  — Activate / deactivate
    /departments            — List, create departments
"""


import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_attendance.common.constants import EmployeeGroup, EmployeeStatus
from hr_attendance.common.pagination import PaginatedResponse, PaginationParams
from hr_attendance.core_hr.schemas import (
    DepartmentCreate,
    DepartmentResponse,
    EmployeeCreate,
    EmployeeResponse,
    EmployeeStatusUpdate,
)
from hr_attendance.core_hr.service import DepartmentService, EmployeeService
from hr_attendance.database import get_db

employees_router = APIRouter(prefix="", tags=["employees"])
departments_router = APIRouter(prefix="", tags=["departments"])


# ═════════════════════════════════════════════════════════════════════
# Employee Endpoints
# ═════════════════════════════════════════════════════════════════════


@employees_router.get("", response_model=PaginatedResponse[EmployeeResponse])
async def list_employees(
    db: AsyncSession = Depends(get_db),
    pagination: PaginationParams = Depends(),
    search: Optional[str] = Query(None, description="Search by full name"),
    department_id: Optional[uuid.UUID] = Query(None, description="Filter by department"),
    status: Optional[EmployeeStatus] = Query(None, description="Filter by status (active, inactive)"),
    group: Optional[EmployeeGroup] = Query(None, description="Filter by group (group_a, group_b)"),
):
    """List employees with pagination and filtering."""
    return await EmployeeService.list_employees(
        db,
        pagination,
        search=search,
        department_id=department_id,
        status=status,
        employee_group=group,
    )


@employees_router.post("", response_model=EmployeeResponse, status_code=201)
async def create_employee(
    body: EmployeeCreate,
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeService.create_employee(db, body)


@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    return await EmployeeService.get_employee(db, employee_id)


@employees_router.put("/{employee_id}/status", response_model=EmployeeResponse)
async def update_employee_status(
    employee_id: uuid.UUID,
    body: EmployeeStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Activate or deactivate an employee."""
    return await EmployeeService.update_status(db, employee_id, body.status)


# ═════════════════════════════════════════════════════════════════════
# Department Endpoints
# ═════════════════════════════════════════════════════════════════════


@departments_router.get("", response_model=list[DepartmentResponse])
async def list_departments(
    is_active: Optional[bool] = Query(True),
    db: AsyncSession = Depends(get_db),
):
    return await DepartmentService.list_departments(db, is_active=is_active)


@departments_router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    body: DepartmentCreate,
    db: AsyncSession = Depends(get_db),
):
    return await DepartmentService.create_department(db, body)
