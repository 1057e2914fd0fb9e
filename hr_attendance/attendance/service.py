"""Attendance service layer — daily attendance records and the holiday calendar.

Business logic:
  - One attendance record per employee per day (biometric or manual source)
  - Holiday calendar with group-specific holidays
  - Working-day resolution (weekends + holidays) shared with the leave module
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Optional

from sqlalchemy import extract, select
from sqlalchemy.ext.asyncio import AsyncSession

from hr_attendance.attendance.models import AttendanceRecord, Holiday
from hr_attendance.attendance.schemas import (
    AttendanceCreate,
    AttendanceRecordResponse,
    HolidayCreate,
    HolidayResponse,
)
from hr_attendance.common.constants import WEEKEND_DAYS, EmployeeGroup
from hr_attendance.common.exceptions import ConflictError
from hr_attendance.core_hr.service import EmployeeService

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════
# AttendanceService
# ═════════════════════════════════════════════════════════════════════


class AttendanceService:
    """Async attendance and holiday operations."""

    # ─────────────────────────────────────────────────────────────────
    # Working-day helpers
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def is_weekend(target_date: date) -> bool:
        return target_date.weekday() in WEEKEND_DAYS

    @staticmethod
    async def get_holidays_between(
        db: AsyncSession,
        from_date: date,
        to_date: date,
    ) -> list[Holiday]:
        result = await db.execute(
            select(Holiday)
            .where(Holiday.date >= from_date, Holiday.date <= to_date)
            .order_by(Holiday.date)
        )
        return list(result.scalars().all())

    @staticmethod
    def holiday_dates_for_group(
        holidays: list[Holiday],
        group: EmployeeGroup,
    ) -> set[date]:
        """Dates among *holidays* that apply to employees of *group*."""
        return {h.date for h in holidays if h.applies_to(group)}

    @staticmethod
    async def is_non_working_day(
        db: AsyncSession,
        target_date: date,
        group: EmployeeGroup,
    ) -> bool:
        """True if *target_date* is a Saturday/Sunday or a holiday that applies
        to *group* (holidays of type ``weekend`` included)."""

        if AttendanceService.is_weekend(target_date):
            return True
        holidays = await AttendanceService.get_holidays_between(
            db, target_date, target_date,
        )
        return target_date in AttendanceService.holiday_dates_for_group(holidays, group)

    # ─────────────────────────────────────────────────────────────────
    # Attendance records
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def list_attendance(
        db: AsyncSession,
        target_date: date,
        *,
        employee_id: Optional[uuid.UUID] = None,
    ) -> list[AttendanceRecordResponse]:
        """All attendance records for a date."""

        query = (
            select(AttendanceRecord)
            .where(AttendanceRecord.date == target_date)
            .order_by(AttendanceRecord.check_in)
        )
        if employee_id is not None:
            query = query.where(AttendanceRecord.employee_id == employee_id)
        result = await db.execute(query)
        return [AttendanceRecordResponse.model_validate(r) for r in result.scalars().all()]

    @staticmethod
    async def get_present_employee_ids(
        db: AsyncSession,
        target_date: date,
    ) -> set[uuid.UUID]:
        """IDs of employees with an attendance record on *target_date*."""

        result = await db.execute(
            select(AttendanceRecord.employee_id).where(
                AttendanceRecord.date == target_date,
            )
        )
        return {row[0] for row in result.all()}

    @staticmethod
    async def record_attendance(
        db: AsyncSession,
        data: AttendanceCreate,
    ) -> AttendanceRecordResponse:
        """Store an attendance record; at most one per employee per day."""

        await EmployeeService.get_employee_or_404(db, data.employee_id)

        existing = await db.execute(
            select(AttendanceRecord.id).where(
                AttendanceRecord.employee_id == data.employee_id,
                AttendanceRecord.date == data.date,
            )
        )
        if existing.scalar() is not None:
            raise ConflictError("date", data.date.isoformat())

        record = AttendanceRecord(
            employee_id=data.employee_id,
            date=data.date,
            check_in=data.check_in,
            check_out=data.check_out,
            source=data.source,
            remarks=data.remarks,
        )
        db.add(record)
        await db.flush()
        logger.debug("Attendance recorded for %s on %s", data.employee_id, data.date)
        return AttendanceRecordResponse.model_validate(record)

    # ─────────────────────────────────────────────────────────────────
    # Holidays
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    async def list_holidays(
        db: AsyncSession,
        *,
        year: Optional[int] = None,
    ) -> list[HolidayResponse]:
        """List holidays, optionally filtered by year."""

        query = select(Holiday).order_by(Holiday.date)
        if year is not None:
            query = query.where(extract("year", Holiday.date) == year)
        result = await db.execute(query)
        return [HolidayResponse.model_validate(h) for h in result.scalars().all()]

    @staticmethod
    async def create_holiday(
        db: AsyncSession,
        data: HolidayCreate,
    ) -> HolidayResponse:
        existing = await db.execute(
            select(Holiday.id).where(
                Holiday.date == data.date,
                Holiday.name == data.name,
            )
        )
        if existing.scalar() is not None:
            raise ConflictError("date", data.date.isoformat())

        holiday = Holiday(
            name=data.name,
            date=data.date,
            holiday_type=data.holiday_type,
            applicable_groups=[g.value for g in data.applicable_groups],
        )
        db.add(holiday)
        await db.flush()
        logger.info(
            "Holiday %r added on %s (%s)",
            holiday.name, holiday.date, holiday.holiday_type.value,
        )
        return HolidayResponse.model_validate(holiday)
