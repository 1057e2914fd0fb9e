"""Attendance router — daily attendance records and the holiday calendar."""


import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hr_attendance.attendance.schemas import (
    AttendanceCreate,
    AttendanceRecordResponse,
    HolidayCreate,
    HolidayResponse,
)
from hr_attendance.attendance.service import AttendanceService
from hr_attendance.database import get_db

router = APIRouter(prefix="", tags=["attendance"])
holidays_router = APIRouter(prefix="", tags=["holidays"])


# ── GET /attendance ─────────────────────────────────────────────────

@router.get("", response_model=list[AttendanceRecordResponse])
async def list_attendance(
    date: date = Query(..., description="Attendance date (YYYY-MM-DD)"),
    employee_id: Optional[uuid.UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Attendance records for a single date."""
    return await AttendanceService.list_attendance(db, date, employee_id=employee_id)


# ── POST /attendance ────────────────────────────────────────────────

@router.post("", response_model=AttendanceRecordResponse, status_code=201)
async def record_attendance(
    body: AttendanceCreate,
    db: AsyncSession = Depends(get_db),
):
    return await AttendanceService.record_attendance(db, body)


# ── GET /holidays ───────────────────────────────────────────────────

@holidays_router.get("", response_model=list[HolidayResponse])
async def list_holidays(
    year: Optional[int] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List holidays, optionally filtered by year."""
    return await AttendanceService.list_holidays(db, year=year)


# ── POST /holidays ──────────────────────────────────────────────────

@holidays_router.post("", response_model=HolidayResponse, status_code=201)
async def create_holiday(
    body: HolidayCreate,
    db: AsyncSession = Depends(get_db),
):
    return await AttendanceService.create_holiday(db, body)
