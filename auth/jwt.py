"""
JWT-style token creation and verification.

Tokens use the compact ``header.payload.signature`` layout, each part
base64url-encoded without padding and signed with HMAC-SHA256.  The
secret and lifetime come from ``Settings`` (env vars ``JWT_SECRET`` and
``JWT_EXPIRY_SECONDS``).
"""

from __future__ import annotations

import hashlib
import hmac
import json
import logging
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

_HEADER = {"alg": "HS256", "typ": "JWT"}


@dataclass(frozen=True)
class SessionClaim:
    id: int
    fullname: Optional[str]
    iat: int
    exp: int


def _b64encode(raw: bytes) -> str:
    return urlsafe_b64encode(raw).rstrip(b"=").decode()


def _b64decode(part: str) -> bytes:
    return urlsafe_b64decode(part + "=" * (-len(part) % 4))


def _encode_segment(data: Dict[str, Any]) -> str:
    return _b64encode(json.dumps(data, separators=(",", ":")).encode())


class TokenService:
    def __init__(
        self,
        secret: str,
        expiry_seconds: int = 3600,
        clock: Callable[[], float] = time.time,
    ):
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds
        self._clock = clock

    def _sign(self, signing_input: str) -> str:
        digest = hmac.new(self._secret, signing_input.encode(), hashlib.sha256).digest()
        return _b64encode(digest)

    def issue(self, user_id: int, fullname: Optional[str]) -> str:
        """Create a signed token for ``user_id`` valid for ``expiry_seconds``."""
        now = int(self._clock())
        payload = {
            "id": user_id,
            "fullname": fullname,
            "iat": now,
            "exp": now + self.expiry_seconds,
        }
        signing_input = _encode_segment(_HEADER) + "." + _encode_segment(payload)
        return signing_input + "." + self._sign(signing_input)

    def verify(self, token: str) -> Optional[SessionClaim]:
        """
        Verify token and return its claim.

        Returns ``None`` on a malformed token, a signature mismatch or
        once the expiry has been reached.
        """
        try:
            header_b64, payload_b64, sig = token.split(".")
            signing_input = header_b64 + "." + payload_b64
            if not hmac.compare_digest(sig, self._sign(signing_input)):
                raise ValueError("bad signature")
            header = json.loads(_b64decode(header_b64))
            if header.get("alg") != _HEADER["alg"]:
                raise ValueError("unexpected algorithm")
            payload = json.loads(_b64decode(payload_b64))
            claim = SessionClaim(
                id=payload["id"],
                fullname=payload["fullname"],
                iat=int(payload["iat"]),
                exp=int(payload["exp"]),
            )
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.debug("Rejected token: %s", exc)
            return None
        if self._clock() >= claim.exp:
            logger.debug("Rejected token: expired for user %s", claim.id)
            return None
        return claim
