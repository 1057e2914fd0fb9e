"""Leave request test suite — working-day counting, overlap validation,
approval charging the balance, rejection and API endpoints.
"""

from __future__ import annotations

import uuid
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from hr_attendance.attendance.models import Holiday
from hr_attendance.common.constants import EmployeeGroup, HolidayType, LeaveStatus
from hr_attendance.common.exceptions import NotFoundException, ValidationException
from hr_attendance.core_hr.models import Employee
from hr_attendance.leave.models import LeaveBalance, LeaveDeduction, LeaveType
from hr_attendance.leave.schemas import LeaveRequestCreate
from hr_attendance.leave.service import LeaveBalanceService, LeaveRequestService
from tests.conftest import _make_employee


# ── Helpers ─────────────────────────────────────────────────────────


async def _seed_employee(db: AsyncSession, **kwargs) -> Employee:
    emp = Employee(**_make_employee(**kwargs))
    db.add(emp)
    await db.flush()
    return emp


def _request(emp: Employee, start: date, end: date, **kwargs) -> LeaveRequestCreate:
    return LeaveRequestCreate(employee_id=emp.id, start_date=start, end_date=end, **kwargs)


# ═════════════════════════════════════════════════════════════════════
# 1. SUBMISSION
# ═════════════════════════════════════════════════════════════════════


class TestCreateLeaveRequest:

    async def test_counts_weekdays_only(self, db: AsyncSession):
        """Fri 7 Mar → Tue 11 Mar 2025 spans a weekend: 3 working days."""
        emp = await _seed_employee(db)

        out = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 7), date(2025, 3, 11)),
        )

        assert out.total_days == 3
        assert out.status == LeaveStatus.pending

    async def test_group_holiday_excluded_for_that_group(self, db: AsyncSession):
        emp_a = await _seed_employee(db, employee_group=EmployeeGroup.group_a)
        emp_b = await _seed_employee(db, employee_group=EmployeeGroup.group_b)
        db.add(Holiday(
            name="Founders Day",
            date=date(2025, 3, 12),
            holiday_type=HolidayType.special,
            applicable_groups=["group_b"],
        ))
        await db.flush()

        out_a = await LeaveRequestService.create_leave_request(
            db, _request(emp_a, date(2025, 3, 10), date(2025, 3, 14)),
        )
        out_b = await LeaveRequestService.create_leave_request(
            db, _request(emp_b, date(2025, 3, 10), date(2025, 3, 14)),
        )

        assert out_a.total_days == 5
        assert out_b.total_days == 4

    async def test_weekend_only_range_rejected(self, db: AsyncSession):
        emp = await _seed_employee(db)

        with pytest.raises(ValidationException):
            await LeaveRequestService.create_leave_request(
                db, _request(emp, date(2025, 3, 8), date(2025, 3, 9)),
            )

    async def test_overlap_with_pending_rejected(self, db: AsyncSession):
        emp = await _seed_employee(db)
        await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 12)),
        )

        with pytest.raises(ValidationException):
            await LeaveRequestService.create_leave_request(
                db, _request(emp, date(2025, 3, 12), date(2025, 3, 14)),
            )

    async def test_rejected_request_does_not_block(self, db: AsyncSession):
        emp = await _seed_employee(db)
        first = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 10)),
        )
        await LeaveRequestService.reject_leave_request(db, first.id, "Busy week")

        second = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 10)),
        )

        assert second.total_days == 1

    async def test_unknown_employee(self, db: AsyncSession):
        with pytest.raises(NotFoundException):
            await LeaveRequestService.create_leave_request(
                db,
                LeaveRequestCreate(
                    employee_id=uuid.uuid4(),
                    start_date=date(2025, 3, 10),
                    end_date=date(2025, 3, 10),
                ),
            )

    async def test_unknown_leave_type(self, db: AsyncSession):
        emp = await _seed_employee(db)

        with pytest.raises(NotFoundException):
            await LeaveRequestService.create_leave_request(
                db,
                _request(
                    emp, date(2025, 3, 10), date(2025, 3, 10),
                    leave_type_id=uuid.uuid4(),
                ),
            )

    def test_end_before_start_invalid(self):
        with pytest.raises(ValueError):
            LeaveRequestCreate(
                employee_id=uuid.uuid4(),
                start_date=date(2025, 3, 12),
                end_date=date(2025, 3, 10),
            )

    def test_cross_year_invalid(self):
        with pytest.raises(ValueError):
            LeaveRequestCreate(
                employee_id=uuid.uuid4(),
                start_date=date(2025, 12, 30),
                end_date=date(2026, 1, 2),
            )


# ═════════════════════════════════════════════════════════════════════
# 2. REVIEW
# ═════════════════════════════════════════════════════════════════════


class TestReview:

    async def test_approve_charges_balance(self, db: AsyncSession):
        emp = await _seed_employee(db)
        lr = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 14)),
        )

        out = await LeaveRequestService.approve_leave_request(db, lr.id, remarks="OK")

        assert out.status == LeaveStatus.approved
        assert out.reviewer_remarks == "OK"
        balance = await LeaveBalanceService.get_balance(db, emp.id, 2025)
        assert balance.used_days == 5
        assert balance.remaining_days == 40

    async def test_approve_beyond_entitlement_rejected(self, db: AsyncSession):
        emp = await _seed_employee(db)
        db.add(LeaveBalance(employee_id=emp.id, year=2025, annual_entitlement=45, used_days=44))
        await db.flush()
        lr = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 14)),
        )

        with pytest.raises(ValidationException) as exc_info:
            await LeaveRequestService.approve_leave_request(db, lr.id)

        assert "total_days" in exc_info.value.errors
        balance = await LeaveBalanceService.get_balance(db, emp.id, 2025)
        assert balance.used_days == 44
        pending = await LeaveRequestService.get_request_or_404(db, lr.id)
        assert pending.status == LeaveStatus.pending

    async def test_reversed_deduction_frees_room_for_approval(self, db: AsyncSession):
        """A full balance can still take leave for a day that was auto-deducted."""
        emp = await _seed_employee(db)
        balance = LeaveBalance(employee_id=emp.id, year=2025, annual_entitlement=45, used_days=45)
        db.add(balance)
        await db.flush()
        db.add(LeaveDeduction(
            employee_id=emp.id, leave_balance_id=balance.id,
            date=date(2025, 3, 10), days=1,
        ))
        await db.flush()
        lr = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 10)),
        )

        out = await LeaveRequestService.approve_leave_request(db, lr.id)

        assert out.status == LeaveStatus.approved
        balance = await LeaveBalanceService.get_balance(db, emp.id, 2025)
        assert balance.used_days == 45

    async def test_approve_twice_fails(self, db: AsyncSession):
        emp = await _seed_employee(db)
        lr = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 10)),
        )
        await LeaveRequestService.approve_leave_request(db, lr.id)

        with pytest.raises(ValidationException):
            await LeaveRequestService.approve_leave_request(db, lr.id)

    async def test_reject_leaves_balance_untouched(self, db: AsyncSession):
        emp = await _seed_employee(db)
        lr = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 10)),
        )

        out = await LeaveRequestService.reject_leave_request(db, lr.id, "Short staffed")

        assert out.status == LeaveStatus.rejected
        assert await LeaveBalanceService.get_balance(db, emp.id, 2025) is None

    async def test_reject_approved_fails(self, db: AsyncSession):
        emp = await _seed_employee(db)
        lr = await LeaveRequestService.create_leave_request(
            db, _request(emp, date(2025, 3, 10), date(2025, 3, 10)),
        )
        await LeaveRequestService.approve_leave_request(db, lr.id)

        with pytest.raises(ValidationException):
            await LeaveRequestService.reject_leave_request(db, lr.id, "Too late")

    async def test_unknown_request(self, db: AsyncSession):
        with pytest.raises(NotFoundException):
            await LeaveRequestService.approve_leave_request(db, uuid.uuid4())


# ═════════════════════════════════════════════════════════════════════
# 3. API
# ═════════════════════════════════════════════════════════════════════


class TestLeaveRequestAPI:

    async def test_submit_approve_flow(self, client, db: AsyncSession):
        emp = await _seed_employee(db)
        await db.commit()

        resp = await client.post(
            "/api/leave-requests",
            json={
                "employeeId": str(emp.id),
                "startDate": "2025-03-10",
                "endDate": "2025-03-11",
                "reason": "Travel",
            },
        )
        assert resp.status_code == 201
        request_id = resp.json()["id"]
        assert resp.json()["total_days"] == 2

        resp = await client.put(f"/api/leave-requests/{request_id}/approve")
        assert resp.status_code == 200
        assert resp.json()["status"] == "approved"

        resp = await client.get(
            "/api/leave-requests", params={"status": "approved"},
        )
        assert resp.status_code == 200
        assert resp.json()["meta"]["total"] == 1

    async def test_reject_requires_reason(self, client, db: AsyncSession):
        emp = await _seed_employee(db)
        await db.commit()
        resp = await client.post(
            "/api/leave-requests",
            json={"employee_id": str(emp.id), "start_date": "2025-03-10",
                  "end_date": "2025-03-10"},
        )
        request_id = resp.json()["id"]

        resp = await client.put(f"/api/leave-requests/{request_id}/reject", json={})

        assert resp.status_code == 422

    async def test_list_leave_types(self, client, db: AsyncSession):
        db.add(LeaveType(code="AL", name="Annual Leave"))
        db.add(LeaveType(code="XX", name="Retired", is_active=False))
        await db.commit()

        resp = await client.get("/api/leave-types")

        assert resp.status_code == 200
        assert [t["code"] for t in resp.json()] == ["AL"]
