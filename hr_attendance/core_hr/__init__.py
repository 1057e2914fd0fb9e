"""Core HR module — Department and Employee models, schemas and services."""

from hr_attendance.core_hr.models import Department, Employee

__all__ = ["Employee", "Department"]
