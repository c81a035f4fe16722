"""Header contract for outgoing requests.

Every logical call carries:

* ``x-goog-api-client``: client identification built from an immutable
  :class:`ClientInfo` handed to the dispatcher at construction;
* ``x-goog-gcs-idempotency-token``: a token generated once per logical call
  and reused verbatim by every retry of that call.

Caller headers arrive from two places. Headers set on the request itself
always win. Headers carried by the call context are added next and override
the dispatcher's own headers on a key collision.
"""
from __future__ import annotations

import platform
import re
import uuid
from dataclasses import dataclass, field
from typing import Mapping, Tuple

import httpx

from ..errors import ErrorCode, ProviderError
from ...config.defaults import LIBRARY_NAME, LIBRARY_VERSION

CLIENT_INFO_HEADER = "x-goog-api-client"
IDEMPOTENCY_HEADER = "x-goog-gcs-idempotency-token"
API_KEY_HEADER = "x-goog-api-key"

_VERSION_RE = re.compile(r"^(\d+(?:\.\d+)*)\.?(.*)$")


def python_version_token(version: str | None = None) -> str:
    """Return the interpreter version as a whitespace-free semver-ish token.

    ``"3.12"`` becomes ``"3.12.0"`` and a pre-release such as ``"3.13.0rc1"``
    becomes ``"3.13.0-rc1"``. Unparseable input yields ``""``.
    """
    raw = (version if version is not None else platform.python_version()).strip()
    raw = raw.split()[0] if raw else ""
    m = _VERSION_RE.match(raw)
    if not m:
        return ""
    numbers, prerelease = m.group(1), m.group(2)
    parts = numbers.split(".")
    while len(parts) < 3:
        parts.append("0")
    token = ".".join(parts)
    if prerelease:
        token += "-" + prerelease.lstrip("-+")
    return token


@dataclass(frozen=True)
class ClientInfo:
    """Immutable client identification passed to the dispatcher.

    Attributes:
        library_name: Library token name.
        library_version: Library version.
        language_version: Interpreter version token.
        extra: Additional ``name/version`` tokens appended in order.
    """

    library_name: str = LIBRARY_NAME
    library_version: str = LIBRARY_VERSION
    language_version: str = field(default_factory=python_version_token)
    extra: Tuple[str, ...] = ()

    def header_value(self) -> str:
        tokens = [f"gl-python/{self.language_version}", f"{self.library_name}/{self.library_version}"]
        tokens.extend(self.extra)
        return " ".join(tokens)


def new_idempotency_token() -> str:
    return str(uuid.uuid4())


def apply_call_headers(
    request: httpx.Request,
    *,
    client_info: ClientInfo,
    idempotency_token: str,
    context_headers: Mapping[str, str],
) -> None:
    """Install the call headers on ``request`` in place (once per logical call)."""
    explicit = {k.lower() for k in request.headers.keys()}
    context_keys = {k.lower() for k in context_headers}
    own = {
        CLIENT_INFO_HEADER: client_info.header_value(),
        IDEMPOTENCY_HEADER: idempotency_token,
    }
    for key, value in own.items():
        if key not in explicit and key not in context_keys:
            request.headers[key] = value
    for key, value in context_headers.items():
        if key.lower() not in explicit:
            request.headers[key] = value


def _content_length(request: httpx.Request) -> int:
    raw = (request.headers.get("content-length") or "0").strip()
    if not (raw.isascii() and raw.isdigit()):
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message=f"invalid Content-Length header: {raw!r}",
            attempts=0,
        )
    return int(raw)


def check_encoding_directives(request: httpx.Request) -> None:
    """Reject requests with conflicting encoding headers before any I/O.

    An explicitly cleared ``Accept-Encoding`` header, or an explicitly cleared
    ``Content-Encoding`` on a request that has a body, cannot be honoured by
    the transport and is reported as a validation error. So is a
    ``Content-Length`` that is not a non-negative integer.
    """
    accept = request.headers.get("accept-encoding")
    if accept is not None and not accept.strip():
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message="custom empty Accept-Encoding header is not allowed",
            attempts=0,
        )
    content_encoding = request.headers.get("content-encoding")
    has_body = _content_length(request) > 0 or "transfer-encoding" in request.headers
    if content_encoding is not None and not content_encoding.strip() and has_body:
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message="request body present but Content-Encoding header was cleared",
            attempts=0,
        )


def is_replayable(request: httpx.Request) -> bool:
    """Return True when the request body can be sent again unchanged."""
    return isinstance(request.stream, httpx.ByteStream)


__all__ = [
    "CLIENT_INFO_HEADER",
    "IDEMPOTENCY_HEADER",
    "API_KEY_HEADER",
    "ClientInfo",
    "python_version_token",
    "new_idempotency_token",
    "apply_call_headers",
    "check_encoding_directives",
    "is_replayable",
]
