"""Attendance Pydantic v2 schemas — attendance records and holidays."""


import uuid
from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hr_attendance.common.constants import EmployeeGroup, HolidayType


# ═════════════════════════════════════════════════════════════════════
# Attendance record
# ═════════════════════════════════════════════════════════════════════


class AttendanceCreate(BaseModel):
    """Payload for recording a day's attendance for one employee."""

    model_config = ConfigDict(populate_by_name=True)

    employee_id: uuid.UUID = Field(..., alias="employeeId")
    date: date
    check_in: Optional[time] = Field(None, alias="checkIn")
    check_out: Optional[time] = Field(None, alias="checkOut")
    source: str = Field(
        default="biometric",
        max_length=50,
        description="Record source: biometric, manual, web",
    )
    remarks: Optional[str] = Field(None, max_length=500)

    @model_validator(mode="after")
    def validate_times(self) -> "AttendanceCreate":
        if self.check_in and self.check_out and self.check_out < self.check_in:
            raise ValueError("check_out must not be earlier than check_in.")
        return self


class AttendanceRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    date: date
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    source: str
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None


# ═════════════════════════════════════════════════════════════════════
# Holidays
# ═════════════════════════════════════════════════════════════════════


class HolidayCreate(BaseModel):
    """Payload for adding a holiday to the calendar."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=150)
    date: date
    holiday_type: HolidayType = Field(HolidayType.annual, alias="type")
    applicable_groups: list[EmployeeGroup] = Field(
        default_factory=list,
        alias="applicableGroups",
        description="Groups the holiday applies to; empty = all groups",
    )

    @field_validator("applicable_groups")
    @classmethod
    def dedupe_groups(cls, v: list[EmployeeGroup]) -> list[EmployeeGroup]:
        return list(dict.fromkeys(v))


class HolidayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    date: date
    holiday_type: HolidayType
    applicable_groups: list[str] = []
