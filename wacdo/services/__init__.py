"""
                        Services Module

Contains the business logic behind the HTTP routers.

Services:
    - catalog: One CRUD service per resource
    - passwords: Password policy and bcrypt hashing
    - tokens: Session token issuing and verification
    - rate_limit: Process-wide token bucket and its middleware
"""

from wacdo.services.rate_limit import RateLimitMiddleware, TokenBucket
from wacdo.services.tokens import TokenService

__all__ = ["RateLimitMiddleware", "TokenBucket", "TokenService"]
