"""Core HR ORM models: Department, Employee.

SQLAlchemy 2.0 async-compatible models with Mapped[] annotations.
Column names match the PostgreSQL schema in alembic/versions/001_initial_schema.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_attendance.common.constants import EmployeeGroup, EmployeeStatus
from hr_attendance.database import Base

if TYPE_CHECKING:
    from hr_attendance.attendance.models import AttendanceRecord
    from hr_attendance.leave.models import LeaveBalance, LeaveRequest


# ═════════════════════════════════════════════════════════════════════
# Department
# ═════════════════════════════════════════════════════════════════════


class Department(Base):
    """Organisational department."""

    __tablename__ = "departments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(sa.String(150), unique=True, nullable=False)
    code: Mapped[Optional[str]] = mapped_column(sa.String(20), unique=True)
    is_active: Mapped[bool] = mapped_column(sa.Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
    )

    # ── Relationships ───────────────────────────────────────────────
    employees: Mapped[list[Employee]] = relationship(back_populates="department")

    def __repr__(self) -> str:
        return f"<Department {self.name!r} ({self.code})>"


# ═════════════════════════════════════════════════════════════════════
# Employee
# ═════════════════════════════════════════════════════════════════════


class Employee(Base):
    """Employee record — the subject of attendance, leave and balances."""

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_code: Mapped[str] = mapped_column(
        sa.String(20), unique=True, nullable=False,
    )
    full_name: Mapped[str] = mapped_column(sa.String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(sa.String(255), unique=True)
    department_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("departments.id"),
    )
    employee_group: Mapped[EmployeeGroup] = mapped_column(
        sa.Enum(EmployeeGroup, name="employee_group", create_type=False),
        nullable=False,
        default=EmployeeGroup.group_a,
    )
    status: Mapped[EmployeeStatus] = mapped_column(
        sa.Enum(EmployeeStatus, name="employee_status", create_type=False),
        nullable=False,
        default=EmployeeStatus.active,
    )
    join_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc),
    )

    # ── Relationships ───────────────────────────────────────────────
    department: Mapped[Optional[Department]] = relationship(
        back_populates="employees",
    )
    attendance_records: Mapped[list["AttendanceRecord"]] = relationship(
        back_populates="employee",
    )
    leave_balances: Mapped[list["LeaveBalance"]] = relationship(
        back_populates="employee",
    )
    leave_requests: Mapped[list["LeaveRequest"]] = relationship(
        back_populates="employee",
    )

    @property
    def department_name(self) -> Optional[str]:
        # Only safe when ``department`` was eager-loaded
        return self.department.name if self.department else None

    def __repr__(self) -> str:
        return f"<Employee {self.employee_code} {self.full_name}>"
