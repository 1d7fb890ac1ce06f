"""HMAC-signed capability tokens granting time-limited access to one record.

Token format::

    <record_id>:<expires_at>:<hex HMAC-SHA256 of "<record_id>:<expires_at>">

Tokens are stateless: nothing is stored on issue, and there is no revocation
list. A token stops verifying once its expiry passes or the secret key
changes.
"""

import hashlib
import hmac
import os
import time
from collections.abc import Callable

from aws_lambda_powertools import Logger

from core.models.errors import ConfigurationError, ValidationError
from core.models.token import IssuedToken
from core.utils.constants import (
    DEFAULT_TOKEN_TTL_SECONDS,
    ENV_API_SECRET_KEY,
    ENV_TOKEN_EXPIRY,
    TOKEN_EXPIRY_MAX_DIGITS,
    TOKEN_SEPARATOR,
)

logger = Logger(UTC=True)

Clock = Callable[[], float]


class CapabilityTokenService:
    """Issues and verifies record-scoped access tokens.

    Holds no mutable state; one instance can be shared by any number of
    concurrent callers.
    """

    def __init__(
        self,
        *,
        secret_key: str | None,
        default_ttl: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Clock = time.time,
    ) -> None:
        if not secret_key:
            raise ConfigurationError(
                message=f"{ENV_API_SECRET_KEY} must be set to issue access tokens",
            )
        if default_ttl < 0:
            raise ConfigurationError(
                message="Token TTL must not be negative",
                details={"default_ttl": default_ttl},
            )

        self._key = secret_key.encode("utf-8")
        self.default_ttl = default_ttl
        self._clock = clock

    @classmethod
    def from_env(cls, *, clock: Clock = time.time) -> "CapabilityTokenService":
        """Build the service from API_SECRET_KEY and TOKEN_EXPIRY.

        Raises:
            ConfigurationError: If the secret is missing or the TTL is not an integer
        """
        raw_ttl = os.getenv(ENV_TOKEN_EXPIRY) or str(DEFAULT_TOKEN_TTL_SECONDS)
        try:
            ttl = int(raw_ttl)
        except ValueError as exc:
            raise ConfigurationError(
                message=f"{ENV_TOKEN_EXPIRY} must be an integer number of seconds",
                details={"value": raw_ttl},
            ) from exc

        return cls(secret_key=os.getenv(ENV_API_SECRET_KEY), default_ttl=ttl, clock=clock)

    def now(self) -> int:
        return int(self._clock())

    def issue(self, record_id: str, ttl_seconds: int | None = None) -> IssuedToken:
        """Issue a token for `record_id` valid for `ttl_seconds` (default TTL if None).

        Raises:
            ValidationError: If the record id cannot be embedded unambiguously
                or the TTL is negative
        """
        if not record_id or TOKEN_SEPARATOR in record_id:
            raise ValidationError(
                message="Record id cannot be used in an access token",
                details={"record_id": record_id},
            )

        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        if ttl < 0:
            raise ValidationError(
                message="Token TTL must not be negative",
                details={"ttl_seconds": ttl},
            )

        expires_at = self.now() + ttl
        payload = f"{record_id}{TOKEN_SEPARATOR}{expires_at}"
        token = f"{payload}{TOKEN_SEPARATOR}{self._sign(payload)}"

        logger.debug(
            "Access token issued",
            extra={"record_id": record_id, "expires_at": expires_at},
        )
        return IssuedToken(token=token, expires_at=expires_at)

    def verify(self, token: str, expected_record_id: str) -> bool:
        """Check that `token` is authentic, unexpired and scoped to `expected_record_id`.

        Never raises; anything malformed is simply not valid. A token is still
        valid during the second equal to its expiry.
        """
        if not isinstance(token, str) or not isinstance(expected_record_id, str):
            return False

        parts = token.split(TOKEN_SEPARATOR)
        if len(parts) != 3:
            return False

        record_id, expires_text, signature = parts

        if record_id != expected_record_id:
            return False

        if not (expires_text.isascii() and expires_text.isdigit()):
            return False

        # int() refuses very long digit strings
        if len(expires_text) > TOKEN_EXPIRY_MAX_DIGITS:
            return False

        if self.now() > int(expires_text):
            return False

        try:
            expected = self._sign(f"{record_id}{TOKEN_SEPARATOR}{expires_text}")
            return hmac.compare_digest(signature.encode("utf-8"), expected.encode("ascii"))
        except UnicodeEncodeError:
            return False

    def _sign(self, payload: str) -> str:
        return hmac.new(self._key, payload.encode("utf-8"), hashlib.sha256).hexdigest()
