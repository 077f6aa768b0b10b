"""
HTTP middleware: request correlation and rate limiting.
"""

from reportcraft.api.middleware.rate_limit import RateLimitMiddleware
from reportcraft.api.middleware.request_id import RequestIdMiddleware

__all__ = ["RateLimitMiddleware", "RequestIdMiddleware"]
