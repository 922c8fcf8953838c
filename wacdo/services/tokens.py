"""
Session Token Service

Issues and verifies HS256-signed bearer tokens carrying the user id.

Tokens are single-shot: there is no refresh, rotation or revocation; a
token stays valid until its ``exp`` claim passes. The same shared secret
signs and verifies.

Usage:
    tokens = TokenService.from_settings(get_settings())
    token = tokens.issue(user.id)
    user_id = tokens.verify(token)   # raises TokenMalformed/TokenExpired/TokenInvalid
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

import jwt

from wacdo.core.config import Settings
from wacdo.core.exceptions import TokenExpired, TokenInvalid, TokenMalformed

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RegisteredClaims:
    """Standard JWT timing claims (seconds since epoch)."""
    iat: int
    exp: int


@dataclass(frozen=True)
class SessionClaims:
    """Identity claim plus the registered claims of one token."""
    user_id: int
    registered: RegisteredClaims

    def to_payload(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "iat": self.registered.iat,
            "exp": self.registered.exp,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "SessionClaims":
        user_id = payload.get("user_id")
        iat = payload.get("iat", 0)
        exp = payload.get("exp")
        # bool is an int subclass; a token saying "user_id": true is not an identity
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise TokenMalformed("Token identity claim missing or malformed")
        if not isinstance(exp, (int, float)) or not isinstance(iat, (int, float)):
            raise TokenMalformed("Token timing claims malformed")
        return cls(user_id=user_id, registered=RegisteredClaims(iat=int(iat), exp=int(exp)))


class TokenService:
    """
    Signs and checks session tokens.

    Args:
        secret: Shared HMAC secret
        lifetime_seconds: Validity window from issuance (default two hours)
        algorithm: Expected symmetric signing algorithm
        clock: Source of "now"; injectable for tests
    """

    def __init__(
        self,
        secret: str,
        lifetime_seconds: int = 2 * 60 * 60,
        algorithm: str = "HS256",
        clock: Clock = utcnow,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.lifetime_seconds = lifetime_seconds
        self.algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock = utcnow) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            lifetime_seconds=settings.jwt_lifetime_seconds,
            algorithm=settings.jwt_algorithm,
            clock=clock,
        )

    def _now(self) -> int:
        return int(self._clock().timestamp())

    def issue(self, user_id: int) -> str:
        """Sign a token for ``user_id`` expiring ``lifetime_seconds`` from now."""
        now = self._now()
        claims = SessionClaims(
            user_id=user_id,
            registered=RegisteredClaims(iat=now, exp=now + self.lifetime_seconds),
        )
        return jwt.encode(claims.to_payload(), self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> SessionClaims:
        """
        Check algorithm and signature and return the claims, without
        judging expiry.

        Raises:
            TokenMalformed: Undecodable token, unexpected algorithm or claims
            TokenInvalid: Signature does not verify
        """
        try:
            header = jwt.get_unverified_header(token)
        except jwt.DecodeError as e:
            logger.debug(f"Undecodable token header: {e}")
            raise TokenMalformed()

        if header.get("alg") != self.algorithm:
            logger.debug(f"Rejected token signed with {header.get('alg')!r}")
            raise TokenMalformed("Unexpected signing algorithm")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["exp", "user_id"],
                },
            )
        except jwt.InvalidSignatureError:
            raise TokenInvalid()
        except (jwt.MissingRequiredClaimError, jwt.DecodeError) as e:
            logger.debug(f"Malformed token: {e}")
            raise TokenMalformed()
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid token: {e}")
            raise TokenInvalid()

        return SessionClaims.from_payload(payload)

    def verify(self, token: str) -> int:
        """
        Verify ``token`` and return the user id it carries.

        Raises:
            TokenMalformed: Undecodable token, unexpected algorithm or claims
            TokenInvalid: Signature does not verify
            TokenExpired: Expiry has passed
        """
        claims = self.decode(token)
        if self._now() >= claims.registered.exp:
            raise TokenExpired()
        return claims.user_id
