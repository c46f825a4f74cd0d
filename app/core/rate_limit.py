"""
Request rate limiting for credential and review endpoints
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import config

limiter = Limiter(key_func=get_remote_address, enabled=config.rate_limit_enabled)
