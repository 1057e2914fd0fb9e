"""Common module — shared utilities for HR Attendance."""

from hr_attendance.common.audit import AuditTrail, create_audit_entry
from hr_attendance.common.constants import (
    DEFAULT_PAGE_SIZE,
    MAX_ANNUAL_ENTITLEMENT,
    MAX_PAGE_SIZE,
    WEEKEND_DAYS,
    BalanceAction,
    EmployeeGroup,
    EmployeeStatus,
    HolidayType,
    LeaveStatus,
    UsageCategory,
)
from hr_attendance.common.exceptions import (
    AppException,
    ConflictError,
    NotFoundException,
    ValidationException,
    register_exception_handlers,
)
from hr_attendance.common.filters import apply_filters, apply_sorting
from hr_attendance.common.pagination import (
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
    paginate,
)

__all__ = [
    # Audit
    "AuditTrail",
    "create_audit_entry",
    # Constants / Enums
    "BalanceAction",
    "EmployeeGroup",
    "EmployeeStatus",
    "HolidayType",
    "LeaveStatus",
    "UsageCategory",
    "DEFAULT_PAGE_SIZE",
    "MAX_ANNUAL_ENTITLEMENT",
    "MAX_PAGE_SIZE",
    "WEEKEND_DAYS",
    # Exceptions
    "AppException",
    "ConflictError",
    "NotFoundException",
    "ValidationException",
    "register_exception_handlers",
    # Filters
    "apply_filters",
    "apply_sorting",
    # Pagination
    "PaginatedResponse",
    "PaginationMeta",
    "PaginationParams",
    "paginate",
]
