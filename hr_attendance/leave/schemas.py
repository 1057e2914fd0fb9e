"""Leave Pydantic v2 schemas — request / response validation.

Naming conventions:
  - *Create / *Request  → request bodies (write)
  - *Out / *Response    → response bodies (read)
  - *Brief              → compact embedded representations

Request bodies accept the camelCase keys used by the web client
(``employeeId``, ``usedDays`` …) as well as snake_case.
"""

import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hr_attendance.common.constants import (
    MAX_ADJUSTMENT_DAYS,
    MAX_ANNUAL_ENTITLEMENT,
    MAX_BALANCE_YEAR,
    MIN_BALANCE_YEAR,
    BalanceAction,
    EmployeeGroup,
    LeaveStatus,
    UsageCategory,
)


# ═════════════════════════════════════════════════════════════════════
# Embedded / shared
# ═════════════════════════════════════════════════════════════════════


class EmployeeBrief(BaseModel):
    """Employee info embedded in balance calculations."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_code: str
    full_name: str
    email: Optional[str] = None
    department_name: Optional[str] = None
    employee_group: EmployeeGroup
    join_date: date


class LeaveTypeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    code: str
    name: str
    description: Optional[str] = None
    is_active: bool = True


# ═════════════════════════════════════════════════════════════════════
# Leave Request
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestCreate(BaseModel):
    """Payload for submitting a leave request."""

    model_config = ConfigDict(populate_by_name=True)

    employee_id: uuid.UUID = Field(..., alias="employeeId")
    leave_type_id: Optional[uuid.UUID] = Field(None, alias="leaveTypeId")
    start_date: date = Field(..., alias="startDate", description="Leave start date (inclusive)")
    end_date: date = Field(..., alias="endDate", description="Leave end date (inclusive)")
    reason: Optional[str] = Field(None, max_length=1000)

    @model_validator(mode="after")
    def validate_dates(self) -> "LeaveRequestCreate":
        if self.start_date > self.end_date:
            raise ValueError("start_date must be on or before end_date.")
        if self.start_date.year != self.end_date.year:
            raise ValueError("A leave request cannot span two leave years.")
        return self


class LeaveRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    leave_type_id: Optional[uuid.UUID] = None
    start_date: date
    end_date: date
    total_days: int
    reason: Optional[str] = None
    status: LeaveStatus
    reviewed_at: Optional[datetime] = None
    reviewer_remarks: Optional[str] = None
    created_at: Optional[datetime] = None


class LeaveApproveRequest(BaseModel):
    remarks: Optional[str] = Field(None, max_length=500)


class LeaveRejectRequest(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)


class LeaveHistoryEntry(BaseModel):
    """Approved leave contributing to a year's used days."""

    start_date: date
    end_date: date
    total_days: int
    leave_type: Optional[str] = None
    reason: Optional[str] = None
    status: LeaveStatus


# ═════════════════════════════════════════════════════════════════════
# Leave Balance — write
# ═════════════════════════════════════════════════════════════════════


class LeaveBalanceCreate(BaseModel):
    """Payload for initialising an employee's balance for a year."""

    model_config = ConfigDict(populate_by_name=True)

    employee_id: uuid.UUID = Field(..., alias="employeeId")
    year: int = Field(..., ge=MIN_BALANCE_YEAR, le=MAX_BALANCE_YEAR)
    annual_entitlement: Optional[int] = Field(
        None,
        ge=1,
        le=MAX_ANNUAL_ENTITLEMENT,
        alias="annualEntitlement",
        description="Defaults to the configured annual entitlement (45)",
    )
    used_days: int = Field(0, ge=0, le=MAX_ANNUAL_ENTITLEMENT, alias="usedDays")


class LeaveBalanceUpdate(BaseModel):
    """Payload for overwriting used days."""

    model_config = ConfigDict(populate_by_name=True)

    used_days: int = Field(..., ge=0, le=MAX_ANNUAL_ENTITLEMENT, alias="usedDays")


class BalanceAdjustRequest(BaseModel):
    """Add days back to, or deduct days from, an employee's balance."""

    action: BalanceAction
    days: int = Field(..., ge=1, le=MAX_ADJUSTMENT_DAYS)
    reason: str = Field(..., min_length=1, max_length=500)


# ═════════════════════════════════════════════════════════════════════
# Leave Balance — read
# ═════════════════════════════════════════════════════════════════════


class LeaveBalanceRow(BaseModel):
    """One employee's balance joined with employee/department/group."""

    employee_id: uuid.UUID
    employee_code: str
    full_name: str
    department: Optional[str] = None
    employee_group: EmployeeGroup
    year: int
    annual_entitlement: int
    used_days: int
    remaining_days: int
    utilization_percentage: float
    usage_category: UsageCategory


class LeaveReportTotals(BaseModel):
    total_employees: int = 0
    total_entitlement: int = 0
    total_used: int = 0
    total_remaining: int = 0
    average_utilization: float = 0.0


class LeaveReportOut(BaseModel):
    year: int
    rows: list[LeaveBalanceRow]
    totals: LeaveReportTotals


class BalanceFigures(BaseModel):
    year: int
    annual_entitlement: int
    total_leave_taken: int
    remaining_days: int
    utilization_percentage: float
    usage_category: UsageCategory


class CalculationBreakdown(BaseModel):
    formula: str
    details: dict[str, str]


class LeaveBalanceCalculationOut(BaseModel):
    """Detailed calculation for one employee and year."""

    employee: EmployeeBrief
    leave_balance: BalanceFigures
    leave_history: list[LeaveHistoryEntry]
    calculation: CalculationBreakdown


# ═════════════════════════════════════════════════════════════════════
# Automatic deduction
# ═════════════════════════════════════════════════════════════════════


class DeductionProcessRequest(BaseModel):
    """Run automatic deduction for a date, optionally for one employee."""

    model_config = ConfigDict(populate_by_name=True)

    date: date
    employee_id: Optional[uuid.UUID] = Field(None, alias="employeeId")


class DeductionResult(BaseModel):
    date: date
    processed_employees: int = 0
    deducted_count: int = 0
    deducted_employee_ids: list[uuid.UUID] = []
    non_working_day: bool = False


class DeductionSummary(BaseModel):
    """Pre-run figures for a date, as shown on the deduction dashboard."""

    date: date
    total_active_employees: int
    present_employees: int
    absent_employees: int
    on_approved_leave: int
    with_remaining_balance: int
    eligible_for_deduction: int
    already_deducted: int
    is_weekend: bool
