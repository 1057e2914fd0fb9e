"""Enums and constants for HR Attendance — matching PostgreSQL ENUM types."""

from __future__ import annotations

import enum


# ── Employee / Core HR ──────────────────────────────────────────────

class EmployeeStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"


class EmployeeGroup(str, enum.Enum):
    group_a = "group_a"
    group_b = "group_b"


# ── Holidays ────────────────────────────────────────────────────────

class HolidayType(str, enum.Enum):
    annual = "annual"
    special = "special"
    weekend = "weekend"


# ── Leave ───────────────────────────────────────────────────────────

class LeaveStatus(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class BalanceAction(str, enum.Enum):
    deduct = "deduct"
    add = "add"


class UsageCategory(str, enum.Enum):
    none = "No Leave Taken"
    low = "Low Usage"
    moderate = "Moderate Usage"
    high = "High Usage"


# ── Misc constants ──────────────────────────────────────────────────

MAX_ANNUAL_ENTITLEMENT = 60
MAX_ADJUSTMENT_DAYS = 45

# Upper bounds (inclusive) of the utilization bands, in percent
LOW_USAGE_THRESHOLD = 25.0
MODERATE_USAGE_THRESHOLD = 75.0

WEEKEND_DAYS = frozenset({5, 6})   # Saturday, Sunday (date.weekday())
MIN_BALANCE_YEAR = 2000
MAX_BALANCE_YEAR = 2100
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 50
