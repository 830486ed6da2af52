"""Limitation de débit / Rate limiter.

Utilise slowapi pour limiter login et inscription par IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from carcost.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
