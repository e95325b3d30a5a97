# showlog/core/limiter.py
"""
Rate limiter configuration module.

Shared limiter instance for the whole application so every router draws
from the same counters.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from showlog.core.config import settings

# Rate limiter configuration - uses IP address as key
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
