"""
Authentication gate for the catalog API.

Requests must carry an ``Authorization: Bearer <token>`` header.  A
token is accepted when it is one of the static tokens configured via
``API_TOKENS`` or when it is a JSON Web Token (JWT) signed with
HMAC‑SHA256 using ``SECRET_KEY`` whose ``exp`` claim lies in the
future.  ``AuthMiddleware`` performs the check for every path before
routing, so handlers never run for rejected requests.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from .config import settings

logger = logging.getLogger(__name__)


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given claims.

    The payload is extended with an ``exp`` field holding the
    expiration time as a UNIX timestamp.  Clients send the result in
    the ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. {"sub": "deploy-bot"}).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a JWT token and return its claims, or ``None`` if invalid.

    The signature is checked in constant time and tokens without an
    ``exp`` claim, or whose ``exp`` has passed, are rejected.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        # binascii.Error and json.JSONDecodeError are both ValueErrors
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or int(exp) < int(time.time()):
        return None
    return data


class AuthenticationError(Exception):
    """Raised when a request carries no valid credential."""


def _static_tokens() -> List[str]:
    return [t.strip() for t in settings.api_tokens.split(',') if t.strip()]


def authenticate(authorization: Optional[str]) -> Dict[str, Any]:
    """Check an ``Authorization`` header value and return the caller's claims.

    Accepts ``Bearer <token>`` where the token is either one of the
    configured static tokens or a valid signed token.  Raises
    ``AuthenticationError`` otherwise.
    """
    scheme, _, token = (authorization or "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise AuthenticationError("Not authenticated")

    for static_token in _static_tokens():
        if hmac.compare_digest(token.encode("utf-8"), static_token.encode("utf-8")):
            return {"sub": "api-token"}

    payload = decode_access_token(token)
    if not payload:
        raise AuthenticationError("Invalid or expired token")
    return payload


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject every request without a valid bearer token.

    Runs before routing and body parsing, so unknown paths and
    malformed bodies are answered with 401 as well.  The caller's
    claims are stored on ``request.state.user``.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            request.state.user = authenticate(request.headers.get("Authorization"))
        except AuthenticationError as exc:
            logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": str(exc)},
                headers={"WWW-Authenticate": "Bearer"},
            )
        return await call_next(request)
