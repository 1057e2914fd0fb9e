"""Leave service layer — requests, balances, reporting and automatic deduction.

Business logic:
  - Leave requests count working days only (weekends and group holidays excluded)
  - Approving a request charges its days to the balance of its year
  - One LeaveBalance per (employee, year), created lazily with the configured
    annual entitlement
  - Automatic deduction charges one day to every active employee who was
    absent on a working day without approved leave, once per date
  - Every balance mutation writes an audit-trail entry
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy import delete, extract, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hr_attendance.attendance.service import AttendanceService
from hr_attendance.common.audit import create_audit_entry
from hr_attendance.common.constants import (
    LOW_USAGE_THRESHOLD,
    MODERATE_USAGE_THRESHOLD,
    BalanceAction,
    LeaveStatus,
    UsageCategory,
)
from hr_attendance.common.exceptions import (
    ConflictError,
    NotFoundException,
    ValidationException,
)
from hr_attendance.common.filters import apply_filters
from hr_attendance.common.pagination import PaginatedResponse, PaginationParams, paginate
from hr_attendance.config import settings
from hr_attendance.core_hr.models import Employee
from hr_attendance.core_hr.service import EmployeeService
from hr_attendance.leave.models import LeaveBalance, LeaveDeduction, LeaveRequest, LeaveType
from hr_attendance.leave.schemas import (
    BalanceAdjustRequest,
    BalanceFigures,
    CalculationBreakdown,
    DeductionResult,
    DeductionSummary,
    EmployeeBrief,
    LeaveBalanceCalculationOut,
    LeaveBalanceCreate,
    LeaveBalanceRow,
    LeaveBalanceUpdate,
    LeaveHistoryEntry,
    LeaveReportOut,
    LeaveReportTotals,
    LeaveRequestCreate,
    LeaveRequestOut,
    LeaveTypeOut,
)

logger = logging.getLogger(__name__)


def usage_category(utilization: float) -> UsageCategory:
    """Bucket a utilization percentage."""
    if utilization <= 0:
        return UsageCategory.none
    if utilization <= LOW_USAGE_THRESHOLD:
        return UsageCategory.low
    if utilization <= MODERATE_USAGE_THRESHOLD:
        return UsageCategory.moderate
    return UsageCategory.high


def _balance_snapshot(balance: LeaveBalance) -> dict[str, Any]:
    return {
        "year": balance.year,
        "annual_entitlement": balance.annual_entitlement,
        "used_days": balance.used_days,
        "remaining_days": balance.remaining_days,
    }


def _build_row(balance: LeaveBalance, employee: Employee) -> LeaveBalanceRow:
    utilization = balance.utilization_percentage
    return LeaveBalanceRow(
        employee_id=employee.id,
        employee_code=employee.employee_code,
        full_name=employee.full_name,
        department=employee.department_name,
        employee_group=employee.employee_group,
        year=balance.year,
        annual_entitlement=balance.annual_entitlement,
        used_days=balance.used_days,
        remaining_days=balance.remaining_days,
        utilization_percentage=utilization,
        usage_category=usage_category(utilization),
    )


# ═════════════════════════════════════════════════════════════════════
# LeaveBalanceService
# ═════════════════════════════════════════════════════════════════════


class LeaveBalanceService:
    """Balance storage, the per-employee calculator and the yearly report."""

    @staticmethod
    async def get_balance(
        db: AsyncSession,
        employee_id: uuid.UUID,
        year: int,
    ) -> Optional[LeaveBalance]:
        result = await db.execute(
            select(LeaveBalance).where(
                LeaveBalance.employee_id == employee_id,
                LeaveBalance.year == year,
            )
        )
        return result.scalars().first()

    @staticmethod
    async def get_or_create_balance(
        db: AsyncSession,
        employee_id: uuid.UUID,
        year: int,
    ) -> LeaveBalance:
        """Fetch the (employee, year) balance, creating it with the default
        entitlement and zero used days if absent."""

        balance = await LeaveBalanceService.get_balance(db, employee_id, year)
        if balance is None:
            balance = LeaveBalance(
                employee_id=employee_id,
                year=year,
                annual_entitlement=settings.ANNUAL_LEAVE_ENTITLEMENT,
                used_days=0,
            )
            db.add(balance)
            await db.flush()
            logger.info("Initialised %s leave balance for employee %s", year, employee_id)
        return balance

    # ── List ────────────────────────────────────────────────────────

    @staticmethod
    async def list_balances(db: AsyncSession, year: int) -> list[LeaveBalanceRow]:
        """Stored balances for *year*, ordered by employee code."""

        result = await db.execute(
            select(LeaveBalance, Employee)
            .join(Employee, Employee.id == LeaveBalance.employee_id)
            .where(LeaveBalance.year == year)
            .options(selectinload(Employee.department))
            .order_by(Employee.employee_code)
        )
        return [_build_row(balance, emp) for balance, emp in result.all()]

    # ── Create ──────────────────────────────────────────────────────

    @staticmethod
    async def create_balance(
        db: AsyncSession,
        data: LeaveBalanceCreate,
    ) -> LeaveBalanceRow:
        employee = await EmployeeService.get_employee_or_404(db, data.employee_id)

        entitlement = data.annual_entitlement
        if entitlement is None:
            entitlement = settings.ANNUAL_LEAVE_ENTITLEMENT
        if data.used_days > entitlement:
            raise ValidationException(
                errors={"used_days": [
                    f"Used days ({data.used_days}) cannot exceed the annual "
                    f"entitlement ({entitlement})."
                ]},
            )

        if await LeaveBalanceService.get_balance(db, data.employee_id, data.year):
            raise ConflictError("year", data.year)

        balance = LeaveBalance(
            employee_id=data.employee_id,
            year=data.year,
            annual_entitlement=entitlement,
            used_days=data.used_days,
        )
        db.add(balance)
        await db.flush()

        await create_audit_entry(
            db,
            action="create",
            entity_type="leave_balance",
            entity_id=balance.id,
            new_values=_balance_snapshot(balance),
        )
        logger.info(
            "Created %s balance for %s: %s/%s",
            balance.year, employee.employee_code,
            balance.used_days, balance.annual_entitlement,
        )
        return _build_row(balance, employee)

    # ── Update ──────────────────────────────────────────────────────

    @staticmethod
    async def update_balance(
        db: AsyncSession,
        employee_id: uuid.UUID,
        year: int,
        data: LeaveBalanceUpdate,
    ) -> LeaveBalanceRow:
        """Overwrite used days on an existing balance."""

        employee = await EmployeeService.get_employee_or_404(db, employee_id)
        balance = await LeaveBalanceService.get_balance(db, employee_id, year)
        if balance is None:
            raise NotFoundException("LeaveBalance", f"{employee_id}/{year}")

        if data.used_days > balance.annual_entitlement:
            raise ValidationException(
                errors={"used_days": [
                    f"Used days ({data.used_days}) cannot exceed the annual "
                    f"entitlement ({balance.annual_entitlement})."
                ]},
            )

        old_values = _balance_snapshot(balance)
        balance.used_days = data.used_days
        balance.updated_at = datetime.now(timezone.utc)
        await db.flush()

        await create_audit_entry(
            db,
            action="update",
            entity_type="leave_balance",
            entity_id=balance.id,
            old_values=old_values,
            new_values=_balance_snapshot(balance),
        )
        return _build_row(balance, employee)

    # ── Adjust (add / deduct) ───────────────────────────────────────

    @staticmethod
    async def adjust_balance(
        db: AsyncSession,
        employee_id: uuid.UUID,
        year: int,
        data: BalanceAdjustRequest,
        actor: str = "system",
    ) -> LeaveBalanceRow:
        """Deduct days from (raise used) or add days back to (lower used) a
        balance. Adding never takes used days below zero."""

        employee = await EmployeeService.get_employee_or_404(db, employee_id)
        balance = await LeaveBalanceService.get_or_create_balance(db, employee_id, year)
        old_values = _balance_snapshot(balance)

        if data.action == BalanceAction.deduct:
            new_used = balance.used_days + data.days
            if new_used > balance.annual_entitlement:
                raise ValidationException(
                    errors={"days": [
                        f"Cannot deduct {data.days} days; only "
                        f"{balance.remaining_days} remaining."
                    ]},
                )
        else:
            new_used = max(0, balance.used_days - data.days)

        balance.used_days = new_used
        balance.updated_at = datetime.now(timezone.utc)
        await db.flush()

        await create_audit_entry(
            db,
            action=f"adjust_{data.action.value}",
            entity_type="leave_balance",
            entity_id=balance.id,
            actor=actor,
            old_values=old_values,
            new_values={**_balance_snapshot(balance), "reason": data.reason},
        )
        logger.info(
            "Balance %s for %s %s: %s day(s), used %s -> %s",
            data.action.value, employee.employee_code, year,
            data.days, old_values["used_days"], new_used,
        )
        return _build_row(balance, employee)

    # ── Calculator ──────────────────────────────────────────────────

    @staticmethod
    def build_calculation(
        entitlement: int,
        used: int,
        remaining: int,
    ) -> CalculationBreakdown:
        return CalculationBreakdown(
            formula=(
                f"{entitlement} (Annual Entitlement) - {used} (Leave Taken) "
                f"= {remaining} (Remaining Balance)"
            ),
            details={
                "annual_entitlement": f"{entitlement} days",
                "total_leave_taken": f"{used} days",
                "remaining_balance": f"{remaining} days",
            },
        )

    @staticmethod
    async def calculate_balance(
        db: AsyncSession,
        employee_id: uuid.UUID,
        year: int,
    ) -> LeaveBalanceCalculationOut:
        """Detailed balance view. Read-only: an employee with no stored
        balance is reported against a fresh entitlement with nothing used."""

        employee = await EmployeeService.get_employee_or_404(db, employee_id)
        balance = await LeaveBalanceService.get_balance(db, employee_id, year)
        if balance is None:
            balance = LeaveBalance(
                employee_id=employee_id,
                year=year,
                annual_entitlement=settings.ANNUAL_LEAVE_ENTITLEMENT,
                used_days=0,
            )

        result = await db.execute(
            select(LeaveRequest)
            .options(selectinload(LeaveRequest.leave_type))
            .where(
                LeaveRequest.employee_id == employee_id,
                LeaveRequest.status == LeaveStatus.approved,
                extract("year", LeaveRequest.start_date) == year,
            )
            .order_by(LeaveRequest.start_date)
        )
        history = [
            LeaveHistoryEntry(
                start_date=lr.start_date,
                end_date=lr.end_date,
                total_days=lr.total_days,
                leave_type=lr.leave_type.name if lr.leave_type else None,
                reason=lr.reason,
                status=lr.status,
            )
            for lr in result.scalars().all()
        ]

        utilization = balance.utilization_percentage
        return LeaveBalanceCalculationOut(
            employee=EmployeeBrief.model_validate(employee),
            leave_balance=BalanceFigures(
                year=year,
                annual_entitlement=balance.annual_entitlement,
                total_leave_taken=balance.used_days,
                remaining_days=balance.remaining_days,
                utilization_percentage=utilization,
                usage_category=usage_category(utilization),
            ),
            leave_history=history,
            calculation=LeaveBalanceService.build_calculation(
                balance.annual_entitlement, balance.used_days, balance.remaining_days,
            ),
        )

    # ── Report ──────────────────────────────────────────────────────

    @staticmethod
    def summarize(rows: list[LeaveBalanceRow]) -> LeaveReportTotals:
        total_entitlement = sum(r.annual_entitlement for r in rows)
        total_used = sum(r.used_days for r in rows)
        average = 0.0
        if total_entitlement > 0:
            average = round(total_used / total_entitlement * 100, 1)
        return LeaveReportTotals(
            total_employees=len(rows),
            total_entitlement=total_entitlement,
            total_used=total_used,
            total_remaining=sum(r.remaining_days for r in rows),
            average_utilization=average,
        )

    @staticmethod
    async def get_report(db: AsyncSession, year: int) -> LeaveReportOut:
        rows = await LeaveBalanceService.list_balances(db, year)
        return LeaveReportOut(
            year=year,
            rows=rows,
            totals=LeaveBalanceService.summarize(rows),
        )


# ═════════════════════════════════════════════════════════════════════
# LeaveRequestService
# ═════════════════════════════════════════════════════════════════════


class LeaveRequestService:
    """Leave request workflow: submit, approve, reject, list."""

    @staticmethod
    async def list_leave_types(db: AsyncSession) -> list[LeaveTypeOut]:
        result = await db.execute(
            select(LeaveType).where(LeaveType.is_active.is_(True)).order_by(LeaveType.code)
        )
        return [LeaveTypeOut.model_validate(lt) for lt in result.scalars().all()]

    @staticmethod
    async def count_working_days(
        db: AsyncSession,
        employee: Employee,
        start_date: date,
        end_date: date,
    ) -> int:
        holidays = await AttendanceService.get_holidays_between(db, start_date, end_date)
        off_dates = AttendanceService.holiday_dates_for_group(
            holidays, employee.employee_group,
        )
        days = 0
        current = start_date
        while current <= end_date:
            if not AttendanceService.is_weekend(current) and current not in off_dates:
                days += 1
            current += timedelta(days=1)
        return days

    @staticmethod
    async def get_request_or_404(
        db: AsyncSession,
        request_id: uuid.UUID,
    ) -> LeaveRequest:
        result = await db.execute(
            select(LeaveRequest).where(LeaveRequest.id == request_id)
        )
        lr = result.scalars().first()
        if lr is None:
            raise NotFoundException("LeaveRequest", str(request_id))
        return lr

    # ── Submit ──────────────────────────────────────────────────────

    @staticmethod
    async def create_leave_request(
        db: AsyncSession,
        data: LeaveRequestCreate,
    ) -> LeaveRequestOut:
        employee = await EmployeeService.get_employee_or_404(db, data.employee_id)

        if data.leave_type_id is not None:
            lt = await db.execute(
                select(LeaveType.id).where(LeaveType.id == data.leave_type_id)
            )
            if lt.scalar() is None:
                raise NotFoundException("LeaveType", str(data.leave_type_id))

        total_days = await LeaveRequestService.count_working_days(
            db, employee, data.start_date, data.end_date,
        )
        if total_days == 0:
            raise ValidationException(
                errors={"start_date": [
                    "The selected range contains no working days."
                ]},
            )

        overlap = await db.execute(
            select(LeaveRequest.id).where(
                LeaveRequest.employee_id == data.employee_id,
                LeaveRequest.status.in_([LeaveStatus.pending, LeaveStatus.approved]),
                LeaveRequest.start_date <= data.end_date,
                LeaveRequest.end_date >= data.start_date,
            )
        )
        if overlap.scalar() is not None:
            raise ValidationException(
                errors={"start_date": [
                    "Overlaps an existing pending or approved leave request."
                ]},
            )

        lr = LeaveRequest(
            employee_id=data.employee_id,
            leave_type_id=data.leave_type_id,
            start_date=data.start_date,
            end_date=data.end_date,
            total_days=total_days,
            reason=data.reason,
            status=LeaveStatus.pending,
        )
        db.add(lr)
        await db.flush()
        logger.info(
            "Leave request %s submitted by %s: %s..%s (%s days)",
            lr.id, employee.employee_code, lr.start_date, lr.end_date, total_days,
        )
        return LeaveRequestOut.model_validate(lr)

    # ── Approve ─────────────────────────────────────────────────────

    @staticmethod
    async def approve_leave_request(
        db: AsyncSession,
        request_id: uuid.UUID,
        remarks: Optional[str] = None,
        actor: str = "system",
    ) -> LeaveRequestOut:
        """Approve a pending request and charge its days to the balance.

        Automatic deductions already logged for dates inside the approved
        range are reversed first so those days are not charged twice.
        """

        lr = await LeaveRequestService.get_request_or_404(db, request_id)
        if lr.status != LeaveStatus.pending:
            raise ValidationException(
                errors={"status": [
                    f"Cannot approve a request with status '{lr.status.value}'."
                ]},
            )

        balance = await LeaveBalanceService.get_or_create_balance(
            db, lr.employee_id, lr.start_date.year,
        )
        old_values = _balance_snapshot(balance)

        reversed_days = await db.scalar(
            select(func.coalesce(func.sum(LeaveDeduction.days), 0)).where(
                LeaveDeduction.employee_id == lr.employee_id,
                LeaveDeduction.date >= lr.start_date,
                LeaveDeduction.date <= lr.end_date,
            )
        )
        new_used = max(0, balance.used_days - reversed_days) + lr.total_days
        if new_used > balance.annual_entitlement:
            raise ValidationException(
                errors={"total_days": [
                    f"Approving {lr.total_days} day(s) would exceed the annual "
                    f"entitlement of {balance.annual_entitlement} days "
                    f"({balance.remaining_days} remaining)."
                ]},
            )

        if reversed_days:
            await db.execute(
                delete(LeaveDeduction).where(
                    LeaveDeduction.employee_id == lr.employee_id,
                    LeaveDeduction.date >= lr.start_date,
                    LeaveDeduction.date <= lr.end_date,
                )
            )
            logger.info(
                "Reversed %s automatic deduction day(s) for request %s",
                reversed_days, lr.id,
            )

        balance.used_days = new_used
        balance.updated_at = datetime.now(timezone.utc)

        now = datetime.now(timezone.utc)
        lr.status = LeaveStatus.approved
        lr.reviewed_at = now
        lr.reviewer_remarks = remarks
        lr.updated_at = now
        await db.flush()

        await create_audit_entry(
            db,
            action="approve",
            entity_type="leave_balance",
            entity_id=balance.id,
            actor=actor,
            old_values=old_values,
            new_values={
                **_balance_snapshot(balance),
                "leave_request_id": str(lr.id),
                "reversed_deductions": int(reversed_days),
            },
        )
        logger.info("Leave request %s approved (%s days)", lr.id, lr.total_days)
        return LeaveRequestOut.model_validate(lr)

    # ── Reject ──────────────────────────────────────────────────────

    @staticmethod
    async def reject_leave_request(
        db: AsyncSession,
        request_id: uuid.UUID,
        reason: str,
    ) -> LeaveRequestOut:
        lr = await LeaveRequestService.get_request_or_404(db, request_id)
        if lr.status != LeaveStatus.pending:
            raise ValidationException(
                errors={"status": [
                    f"Cannot reject a request with status '{lr.status.value}'."
                ]},
            )

        now = datetime.now(timezone.utc)
        lr.status = LeaveStatus.rejected
        lr.reviewed_at = now
        lr.reviewer_remarks = reason
        lr.updated_at = now
        await db.flush()
        logger.info("Leave request %s rejected", lr.id)
        return LeaveRequestOut.model_validate(lr)

    # ── List ────────────────────────────────────────────────────────

    @staticmethod
    async def list_leave_requests(
        db: AsyncSession,
        pagination: PaginationParams,
        *,
        employee_id: Optional[uuid.UUID] = None,
        status: Optional[LeaveStatus] = None,
    ) -> PaginatedResponse:
        query = apply_filters(
            select(LeaveRequest),
            LeaveRequest,
            {"employee_id": employee_id, "status": status},
        )
        if not pagination.sort:
            query = query.order_by(LeaveRequest.start_date.desc())
        return await paginate(
            db,
            query,
            pagination,
            model=LeaveRequest,
            transform=LeaveRequestOut.model_validate,
        )


# ═════════════════════════════════════════════════════════════════════
# LeaveDeductionService
# ═════════════════════════════════════════════════════════════════════


class LeaveDeductionService:
    """Automatic one-day deduction for unexcused absences."""

    @staticmethod
    async def _employees_on_leave(
        db: AsyncSession,
        target_date: date,
    ) -> set[uuid.UUID]:
        result = await db.execute(
            select(LeaveRequest.employee_id).where(
                LeaveRequest.status == LeaveStatus.approved,
                LeaveRequest.start_date <= target_date,
                LeaveRequest.end_date >= target_date,
            )
        )
        return {row[0] for row in result.all()}

    @staticmethod
    async def _already_deducted(
        db: AsyncSession,
        target_date: date,
    ) -> set[uuid.UUID]:
        result = await db.execute(
            select(LeaveDeduction.employee_id).where(LeaveDeduction.date == target_date)
        )
        return {row[0] for row in result.all()}

    @staticmethod
    async def _balances_for_year(
        db: AsyncSession,
        year: int,
    ) -> dict[uuid.UUID, LeaveBalance]:
        result = await db.execute(select(LeaveBalance).where(LeaveBalance.year == year))
        return {b.employee_id: b for b in result.scalars().all()}

    # ── Process ─────────────────────────────────────────────────────

    @staticmethod
    async def process_deduction(
        db: AsyncSession,
        target_date: date,
        employee_id: Optional[uuid.UUID] = None,
    ) -> DeductionResult:
        """Deduct one day from every eligible absent employee.

        An employee is skipped when the date is a weekend or one of their
        group's holidays, when they have an attendance record or approved
        leave covering the date, when they were already deducted for the
        date, or when their balance has nothing remaining. Runs inside the
        caller's transaction; any error aborts the whole batch.
        """

        if employee_id is not None:
            await EmployeeService.get_employee_or_404(db, employee_id)

        employees = await EmployeeService.get_active_employees(db, employee_id=employee_id)
        weekend = AttendanceService.is_weekend(target_date)
        holidays = await AttendanceService.get_holidays_between(db, target_date, target_date)
        present = await AttendanceService.get_present_employee_ids(db, target_date)
        on_leave = await LeaveDeductionService._employees_on_leave(db, target_date)
        deducted_before = await LeaveDeductionService._already_deducted(db, target_date)
        balances = await LeaveDeductionService._balances_for_year(db, target_date.year)

        deducted: list[uuid.UUID] = []
        non_working_for_all = bool(employees)

        for emp in employees:
            off_dates = AttendanceService.holiday_dates_for_group(
                holidays, emp.employee_group,
            )
            if weekend or target_date in off_dates:
                continue
            non_working_for_all = False

            if emp.id in present or emp.id in on_leave or emp.id in deducted_before:
                logger.debug(
                    "Skipping %s on %s: attended, on leave or already deducted",
                    emp.id, target_date,
                )
                continue

            balance = balances.get(emp.id)
            if balance is None:
                balance = await LeaveBalanceService.get_or_create_balance(
                    db, emp.id, target_date.year,
                )
            if balance.remaining_days <= 0:
                logger.debug("Skipping %s on %s: no remaining balance", emp.id, target_date)
                continue

            old_values = _balance_snapshot(balance)
            balance.used_days += 1
            balance.updated_at = datetime.now(timezone.utc)
            db.add(LeaveDeduction(
                employee_id=emp.id,
                leave_balance_id=balance.id,
                date=target_date,
                days=1,
            ))
            await db.flush()

            await create_audit_entry(
                db,
                action="auto_deduct",
                entity_type="leave_balance",
                entity_id=balance.id,
                old_values=old_values,
                new_values={**_balance_snapshot(balance), "date": target_date.isoformat()},
            )
            deducted.append(emp.id)

        logger.info(
            "Automatic deduction for %s: %d employee(s) processed, %d deducted",
            target_date, len(employees), len(deducted),
        )
        return DeductionResult(
            date=target_date,
            processed_employees=len(employees),
            deducted_count=len(deducted),
            deducted_employee_ids=deducted,
            non_working_day=weekend or non_working_for_all,
        )

    # ── Summary ─────────────────────────────────────────────────────

    @staticmethod
    async def get_deduction_summary(
        db: AsyncSession,
        target_date: date,
    ) -> DeductionSummary:
        """Read-only figures for a date ahead of a deduction run."""

        employees = await EmployeeService.get_active_employees(db)
        active_ids = {e.id for e in employees}
        present = await AttendanceService.get_present_employee_ids(db, target_date) & active_ids
        on_leave = await LeaveDeductionService._employees_on_leave(db, target_date) & active_ids
        deducted_before = (
            await LeaveDeductionService._already_deducted(db, target_date) & active_ids
        )
        balances = await LeaveDeductionService._balances_for_year(db, target_date.year)

        absent = active_ids - present
        # A missing balance row means the full entitlement is still available.
        with_balance = {
            emp_id for emp_id in active_ids
            if emp_id not in balances or balances[emp_id].remaining_days > 0
        }
        eligible = (absent - on_leave - deducted_before) & with_balance

        weekend = AttendanceService.is_weekend(target_date)
        if weekend:
            eligible = set()
        else:
            holidays = await AttendanceService.get_holidays_between(
                db, target_date, target_date,
            )
            eligible = {
                e.id for e in employees
                if e.id in eligible
                and target_date not in AttendanceService.holiday_dates_for_group(
                    holidays, e.employee_group,
                )
            }

        return DeductionSummary(
            date=target_date,
            total_active_employees=len(active_ids),
            present_employees=len(present),
            absent_employees=len(absent),
            on_approved_leave=len(on_leave),
            with_remaining_balance=len(with_balance),
            eligible_for_deduction=len(eligible),
            already_deducted=len(deducted_before),
            is_weekend=weekend,
        )
