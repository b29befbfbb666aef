"""HMAC-SHA256 signature verification for inbound webhook deliveries.

``SignatureVerifierMiddleware`` sits in front of the router and checks the
``X-Hub-Signature-256`` header against an HMAC of the raw request body. The
body is read once here and replayed unchanged to the route handler.

Every verification failure is answered with the same ``400`` response, so a
caller cannot tell which check rejected the request.
"""

import binascii
import hashlib
import hmac
from collections.abc import Sequence
from enum import Enum

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import ClientDisconnect, Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

logger = structlog.get_logger()

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


class SignatureCheck(Enum):
    """Outcome of checking a signature header against a body."""

    VALID = "valid"
    MISSING = "missing"
    BAD_FORMAT = "bad_format"
    BAD_HEX = "bad_hex"
    MISMATCH = "mismatch"


_FAILURE_EVENTS = {
    SignatureCheck.MISSING: "unsigned_request_rejected",
    SignatureCheck.BAD_FORMAT: "signature_format_invalid",
    SignatureCheck.BAD_HEX: "signature_hex_invalid",
    SignatureCheck.MISMATCH: "signature_mismatch",
}


def compute_signature(secret: bytes, body: bytes) -> bytes:
    """Return the raw HMAC-SHA256 digest of *body* keyed by *secret*."""
    return hmac.new(secret, msg=body, digestmod=hashlib.sha256).digest()


def verify_signature(secret: bytes, body: bytes, header: str | None) -> SignatureCheck:
    """Check a ``sha256=<hex>`` signature header against *body*.

    The digest comparison is constant time.
    """
    if header is None:
        return SignatureCheck.MISSING
    if not header.startswith(SIGNATURE_PREFIX):
        return SignatureCheck.BAD_FORMAT
    try:
        provided = binascii.unhexlify(header[len(SIGNATURE_PREFIX):])
    except ValueError:
        # binascii.Error subclasses ValueError; non-ASCII input raises ValueError
        return SignatureCheck.BAD_HEX
    if not hmac.compare_digest(compute_signature(secret, body), provided):
        return SignatureCheck.MISMATCH
    return SignatureCheck.VALID


def _route_path(request: Request) -> str:
    """Path as the router matches it, without the mount prefix."""
    path = request.scope["path"]
    root_path = request.scope.get("root_path", "")
    if root_path and path.startswith(root_path):
        path = path[len(root_path):] or "/"
    return path


def _bad_request() -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": "Bad Request"})


class SignatureVerifierMiddleware(BaseHTTPMiddleware):
    """Reject webhook requests whose body is not signed with *secret*.

    Behaviour:
    - Every request is checked except those whose route path (the path with
      any ASGI ``root_path`` removed) is listed in ``exempt_paths``.
    - Unsigned, malformed or mismatched signatures get a ``400``.
    - Verified requests are forwarded and the downstream response is returned
      as is, error statuses included.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        secret: bytes,
        exempt_paths: Sequence[str] = (),
    ) -> None:
        super().__init__(app)
        self._secret = secret
        self._exempt_paths = frozenset(exempt_paths)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = _route_path(request)
        if path in self._exempt_paths:
            return await call_next(request)

        try:
            body = await request.body()
        except ClientDisconnect:
            logger.warning("request_body_unreadable", path=path)
            return _bad_request()

        check = verify_signature(self._secret, body, request.headers.get(SIGNATURE_HEADER))
        if check is not SignatureCheck.VALID:
            logger.warning(_FAILURE_EVENTS[check], path=path, method=request.method)
            return _bad_request()

        response = await call_next(request)
        if response.status_code >= 400:
            logger.warning(
                "webhook_downstream_error", path=path, status_code=response.status_code
            )
        else:
            logger.info("webhook_verified", path=path, status_code=response.status_code)
        return response
