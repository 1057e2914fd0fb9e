"""Attendance ORM models: AttendanceRecord, Holiday."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time, timezone
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_attendance.common.constants import EmployeeGroup, HolidayType
from hr_attendance.database import Base


class AttendanceRecord(Base):
    """One row per employee per day; its presence means the employee attended."""

    __tablename__ = "attendance_records"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "date", name="uq_attendance_emp_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False
    )
    date: Mapped[date] = mapped_column(sa.Date, nullable=False, index=True)
    check_in: Mapped[Optional[time]] = mapped_column(sa.Time)
    check_out: Mapped[Optional[time]] = mapped_column(sa.Time)
    source: Mapped[str] = mapped_column(sa.String(50), default="biometric")
    remarks: Mapped[Optional[str]] = mapped_column(sa.Text)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    employee: Mapped["hr_attendance.core_hr.models.Employee"] = relationship(
        back_populates="attendance_records"
    )

    def __repr__(self) -> str:
        return f"<AttendanceRecord {self.employee_id} {self.date}>"


class Holiday(Base):
    """A non-working day. ``applicable_groups`` empty means every group."""

    __tablename__ = "holidays"
    __table_args__ = (
        sa.UniqueConstraint("date", "name", name="uq_holiday_date_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(150), nullable=False)
    date: Mapped[date] = mapped_column(sa.Date, nullable=False, index=True)
    holiday_type: Mapped[HolidayType] = mapped_column(
        sa.Enum(HolidayType, name="holiday_type", create_type=False),
        nullable=False,
        default=HolidayType.annual,
    )
    applicable_groups: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    def applies_to(self, group: EmployeeGroup) -> bool:
        groups = self.applicable_groups or []
        return not groups or group.value in groups

    def __repr__(self) -> str:
        return f"<Holiday {self.date} {self.name!r} ({self.holiday_type.value})>"
