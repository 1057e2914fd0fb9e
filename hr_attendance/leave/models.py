"""Leave ORM models: LeaveType, LeaveRequest, LeaveBalance, LeaveDeduction."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hr_attendance.common.constants import LeaveStatus
from hr_attendance.database import Base


class LeaveType(Base):
    __tablename__ = "leave_types"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    code: Mapped[str] = mapped_column(sa.String(10), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(sa.String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(sa.Text)
    is_active: Mapped[bool] = mapped_column(sa.Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    requests: Mapped[list[LeaveRequest]] = relationship(back_populates="leave_type")


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False
    )
    leave_type_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("leave_types.id")
    )
    start_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    end_date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    total_days: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    reason: Mapped[Optional[str]] = mapped_column(sa.Text)
    status: Mapped[LeaveStatus] = mapped_column(
        sa.Enum(LeaveStatus, name="leave_status", create_type=False),
        nullable=False,
        default=LeaveStatus.pending,
    )
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(
        sa.DateTime(timezone=True)
    )
    reviewer_remarks: Mapped[Optional[str]] = mapped_column(sa.Text)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    employee: Mapped["hr_attendance.core_hr.models.Employee"] = relationship(
        back_populates="leave_requests"
    )
    leave_type: Mapped[Optional[LeaveType]] = relationship(back_populates="requests")


class LeaveBalance(Base):
    """Annual entitlement and consumption for one employee in one year.

    ``remaining_days`` and ``utilization_percentage`` are derived, never stored.
    """

    __tablename__ = "leave_balances"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "year", name="uq_leave_balance_emp_year"),
        sa.CheckConstraint("used_days >= 0", name="ck_leave_balance_used_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False
    )
    year: Mapped[int] = mapped_column(sa.Integer, nullable=False)
    annual_entitlement: Mapped[int] = mapped_column(
        sa.Integer, nullable=False, server_default=sa.text("45")
    )
    used_days: Mapped[int] = mapped_column(
        sa.Integer, nullable=False, server_default=sa.text("0")
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    employee: Mapped["hr_attendance.core_hr.models.Employee"] = relationship(
        back_populates="leave_balances"
    )
    deductions: Mapped[list[LeaveDeduction]] = relationship(
        back_populates="leave_balance"
    )

    @property
    def remaining_days(self) -> int:
        return max(0, self.annual_entitlement - self.used_days)

    @property
    def utilization_percentage(self) -> float:
        if self.annual_entitlement <= 0:
            return 0.0
        return round(self.used_days / self.annual_entitlement * 100, 1)

    def __repr__(self) -> str:
        return (
            f"<LeaveBalance {self.employee_id} {self.year} "
            f"{self.used_days}/{self.annual_entitlement}>"
        )


class LeaveDeduction(Base):
    """Log of automatic absence deductions; one per employee per date."""

    __tablename__ = "leave_deductions"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "date", name="uq_leave_deduction_emp_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    employee_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False
    )
    leave_balance_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        sa.ForeignKey("leave_balances.id", ondelete="CASCADE"),
        nullable=False,
    )
    date: Mapped[date] = mapped_column(sa.Date, nullable=False)
    days: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    leave_balance: Mapped[LeaveBalance] = relationship(back_populates="deductions")
