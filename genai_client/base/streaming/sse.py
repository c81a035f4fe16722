"""Server-sent-events framing for streamed response bodies.

The service streams one JSON object per event (``alt=sse``)::

    data: {"candidates": [...]}

    data: {"candidates": [...]}

Multiple ``data:`` lines inside one event are joined with newlines; comment
lines (``:``) and other fields are ignored.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Iterator, List

from ..dto.error_payload import parse_error_payload
from ..errors import ErrorCode, ProviderError, ServiceError, classify_status


def _decode(data: str) -> Dict[str, Any]:
    try:
        obj = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ProviderError(code=ErrorCode.INTERNAL, message=f"malformed stream message: {exc.msg}", raw=exc) from exc
    if not isinstance(obj, dict):
        raise ProviderError(code=ErrorCode.INTERNAL, message="stream message is not a JSON object")
    if "error" in obj:
        payload = parse_error_payload(data)
        if payload is not None:
            info = payload.error_info()
            raise ServiceError(
                code=classify_status(payload.code) if payload.code else ErrorCode.SERVER_ERROR,
                message=payload.message or "error in stream",
                status_code=payload.code,
                status=payload.status,
                reason=info.reason if info else None,
                domain=info.domain if info else None,
                metadata=dict(info.metadata) if info else {},
                details=[d.model_dump(by_alias=True) for d in payload.details],
            )
    return obj


def iter_sse_messages(lines: Iterable[str]) -> Iterator[Dict[str, Any]]:
    """Yield decoded JSON objects from SSE ``lines``.

    A message is yielded only once its event is complete (blank line or end
    of input), so a truncated event is never half-decoded.

    Raises:
        ProviderError: A ``data`` payload is not a JSON object.
        ServiceError: The stream carried a structured error object.
    """
    buf: List[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line:
            if buf:
                yield _decode("\n".join(buf))
                buf = []
            continue
        if line.startswith(":"):
            continue
        field, _, value = line.partition(":")
        if field != "data":
            continue
        buf.append(value[1:] if value.startswith(" ") else value)
    if buf:
        yield _decode("\n".join(buf))


__all__ = ["iter_sse_messages"]
