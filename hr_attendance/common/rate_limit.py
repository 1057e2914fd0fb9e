"""Rate limiting via slowapi.

A single module-level Limiter is shared by the app (wired in main.py) and by
routers that want a tighter per-endpoint limit, e.g. the deduction run.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from hr_attendance.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
)
