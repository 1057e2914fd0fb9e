"""Core HR Pydantic v2 schemas — departments and employees."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from hr_attendance.common.constants import EmployeeGroup, EmployeeStatus


# ═════════════════════════════════════════════════════════════════════
# Department
# ═════════════════════════════════════════════════════════════════════


class DepartmentCreate(BaseModel):
    """Payload for creating a department."""

    name: str = Field(..., min_length=1, max_length=150)
    code: Optional[str] = Field(None, max_length=20)


class DepartmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    code: Optional[str] = None
    is_active: bool = True


# ═════════════════════════════════════════════════════════════════════
# Employee
# ═════════════════════════════════════════════════════════════════════


class EmployeeCreate(BaseModel):
    """Payload for creating an employee."""

    model_config = ConfigDict(populate_by_name=True)

    employee_code: str = Field(..., min_length=1, max_length=20, alias="employeeId")
    full_name: str = Field(..., min_length=1, max_length=255, alias="fullName")
    email: Optional[str] = Field(None, max_length=255)
    department_id: Optional[uuid.UUID] = Field(None, alias="departmentId")
    employee_group: EmployeeGroup = Field(EmployeeGroup.group_a, alias="group")
    status: EmployeeStatus = EmployeeStatus.active
    join_date: date = Field(..., alias="joinDate")


class EmployeeStatusUpdate(BaseModel):
    status: EmployeeStatus


class EmployeeResponse(BaseModel):
    """Employee representation used by list and detail endpoints."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_code: str
    full_name: str
    email: Optional[str] = None
    department_id: Optional[uuid.UUID] = None
    department_name: Optional[str] = None
    employee_group: EmployeeGroup
    status: EmployeeStatus
    join_date: date
    created_at: Optional[datetime] = None
