"""Leave router — leave types, requests, balances, report and automatic deduction."""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from hr_attendance.common.constants import MAX_BALANCE_YEAR, MIN_BALANCE_YEAR, LeaveStatus
from hr_attendance.common.pagination import PaginatedResponse, PaginationParams
from hr_attendance.common.rate_limit import limiter
from hr_attendance.database import get_db
from hr_attendance.leave.schemas import (
    BalanceAdjustRequest,
    DeductionProcessRequest,
    DeductionResult,
    DeductionSummary,
    LeaveApproveRequest,
    LeaveBalanceCalculationOut,
    LeaveBalanceCreate,
    LeaveBalanceRow,
    LeaveBalanceUpdate,
    LeaveRejectRequest,
    LeaveReportOut,
    LeaveRequestCreate,
    LeaveRequestOut,
    LeaveTypeOut,
)
from hr_attendance.leave.service import (
    LeaveBalanceService,
    LeaveDeductionService,
    LeaveRequestService,
)

leave_types_router = APIRouter(prefix="", tags=["leave"])
leave_requests_router = APIRouter(prefix="", tags=["leave"])
leave_balances_router = APIRouter(prefix="", tags=["leave-balances"])
deduction_router = APIRouter(prefix="", tags=["leave-deduction"])


# ── GET /leave-types ────────────────────────────────────────────────

@leave_types_router.get("", response_model=list[LeaveTypeOut])
async def list_leave_types(db: AsyncSession = Depends(get_db)):
    return await LeaveRequestService.list_leave_types(db)


# ── GET /leave-requests ─────────────────────────────────────────────

@leave_requests_router.get("", response_model=PaginatedResponse[LeaveRequestOut])
async def list_leave_requests(
    employee_id: Optional[uuid.UUID] = Query(None),
    status: Optional[LeaveStatus] = Query(None),
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await LeaveRequestService.list_leave_requests(
        db, pagination, employee_id=employee_id, status=status,
    )


# ── POST /leave-requests ────────────────────────────────────────────

@leave_requests_router.post("", response_model=LeaveRequestOut, status_code=201)
async def create_leave_request(
    body: LeaveRequestCreate,
    db: AsyncSession = Depends(get_db),
):
    """Submit a leave request. Only working days are counted."""
    return await LeaveRequestService.create_leave_request(db, body)


# ── PUT /leave-requests/{id}/approve ────────────────────────────────

@leave_requests_router.put("/{request_id}/approve", response_model=LeaveRequestOut)
async def approve_leave_request(
    request_id: uuid.UUID,
    body: Optional[LeaveApproveRequest] = None,
    db: AsyncSession = Depends(get_db),
):
    return await LeaveRequestService.approve_leave_request(
        db, request_id, remarks=body.remarks if body else None,
    )


# ── PUT /leave-requests/{id}/reject ─────────────────────────────────

@leave_requests_router.put("/{request_id}/reject", response_model=LeaveRequestOut)
async def reject_leave_request(
    request_id: uuid.UUID,
    body: LeaveRejectRequest,
    db: AsyncSession = Depends(get_db),
):
    return await LeaveRequestService.reject_leave_request(db, request_id, body.reason)


# ── GET /leave-balances ─────────────────────────────────────────────

@leave_balances_router.get("", response_model=list[LeaveBalanceRow])
async def list_balances(
    year: int = Query(..., ge=MIN_BALANCE_YEAR, le=MAX_BALANCE_YEAR),
    db: AsyncSession = Depends(get_db),
):
    """Stored balances for a year joined with employee details."""
    return await LeaveBalanceService.list_balances(db, year)


# ── GET /leave-balances/report ──────────────────────────────────────

@leave_balances_router.get("/report", response_model=LeaveReportOut)
async def balance_report(
    year: int = Query(..., ge=MIN_BALANCE_YEAR, le=MAX_BALANCE_YEAR),
    db: AsyncSession = Depends(get_db),
):
    return await LeaveBalanceService.get_report(db, year)


# ── GET /leave-balances/calculate/{employee_id}/{year} ──────────────

@leave_balances_router.get(
    "/calculate/{employee_id}/{year}",
    response_model=LeaveBalanceCalculationOut,
)
async def calculate_balance(
    employee_id: uuid.UUID,
    year: int = Path(..., ge=MIN_BALANCE_YEAR, le=MAX_BALANCE_YEAR),
    db: AsyncSession = Depends(get_db),
):
    """Balance figures, usage category, approved history and formula."""
    return await LeaveBalanceService.calculate_balance(db, employee_id, year)


# ── POST /leave-balances ────────────────────────────────────────────

@leave_balances_router.post("", response_model=LeaveBalanceRow, status_code=201)
async def create_balance(
    body: LeaveBalanceCreate,
    db: AsyncSession = Depends(get_db),
):
    return await LeaveBalanceService.create_balance(db, body)


# ── PUT /leave-balances/{employee_id}/{year} ────────────────────────

@leave_balances_router.put("/{employee_id}/{year}", response_model=LeaveBalanceRow)
async def update_balance(
    employee_id: uuid.UUID,
    body: LeaveBalanceUpdate,
    year: int = Path(..., ge=MIN_BALANCE_YEAR, le=MAX_BALANCE_YEAR),
    db: AsyncSession = Depends(get_db),
):
    return await LeaveBalanceService.update_balance(db, employee_id, year, body)


# ── POST /leave-balances/{employee_id}/{year}/adjust ────────────────

@leave_balances_router.post(
    "/{employee_id}/{year}/adjust",
    response_model=LeaveBalanceRow,
)
async def adjust_balance(
    employee_id: uuid.UUID,
    body: BalanceAdjustRequest,
    year: int = Path(..., ge=MIN_BALANCE_YEAR, le=MAX_BALANCE_YEAR),
    db: AsyncSession = Depends(get_db),
):
    """Add days back to, or deduct days from, a balance."""
    return await LeaveBalanceService.adjust_balance(db, employee_id, year, body)


# ── POST /leave-deduction/process ───────────────────────────────────

@deduction_router.post("/process", response_model=DeductionResult)
@limiter.limit("10/minute")
async def process_deduction(
    request: Request,
    body: DeductionProcessRequest,
    db: AsyncSession = Depends(get_db),
):
    """Deduct one day from every eligible absent employee for the date."""
    return await LeaveDeductionService.process_deduction(
        db, body.date, employee_id=body.employee_id,
    )


# ── GET /leave-deduction/summary ────────────────────────────────────

@deduction_router.get("/summary", response_model=DeductionSummary)
async def deduction_summary(
    date: date = Query(..., description="Target date (YYYY-MM-DD)"),
    db: AsyncSession = Depends(get_db),
):
    return await LeaveDeductionService.get_deduction_summary(db, date)
