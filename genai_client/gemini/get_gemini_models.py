"""
Gemini: list and describe models

Behavior
- ``ModelIterator`` walks ``GET /{version}/models`` page by page, following
  ``nextPageToken`` until the service stops returning one. Pages are fetched
  lazily, one call per page, each through the client's dispatcher.
- ``get_model`` fetches a single model's metadata.
"""
from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any, Deque, Dict, Optional

from ..base.cancellation import CallContext
from ..base.models import ModelInfo
from ..base.serialization import model_info_from_wire
from .client import full_model_name

if TYPE_CHECKING:
    from .client import Client


class ModelIterator:
    """Iterator over :class:`ModelInfo` records across all result pages.

    Errors are sticky: once a page fetch fails every later ``next()`` raises
    the same error.
    """

    def __init__(self, client: "Client", ctx: Optional[CallContext] = None, *, page_size: Optional[int] = None) -> None:
        self._client = client
        self._ctx = ctx
        self.page_size = page_size
        self._buffer: Deque[ModelInfo] = deque()
        self._next_token: Optional[str] = None
        self._started = False
        self._err: Optional[BaseException] = None
        self.pages_fetched = 0

    def __iter__(self) -> "ModelIterator":
        return self

    def __next__(self) -> ModelInfo:
        if self._err is not None:
            raise self._err
        while not self._buffer:
            if self._started and not self._next_token:
                raise StopIteration
            try:
                self._fetch_page()
            except Exception as exc:
                self._err = exc
                raise
        return self._buffer.popleft()

    @property
    def next_page_token(self) -> Optional[str]:
        return self._next_token

    def _fetch_page(self) -> None:
        params: Dict[str, Any] = {}
        if self.page_size:
            params["pageSize"] = self.page_size
        if self._next_token:
            params["pageToken"] = self._next_token
        data = self._client._call(self._ctx, "GET", "models", params=params or None)
        self._started = True
        self.pages_fetched += 1
        self._buffer.extend(model_info_from_wire(m) for m in data.get("models") or [])
        self._next_token = data.get("nextPageToken") or None


def get_model(client: "Client", name: str, ctx: Optional[CallContext] = None) -> ModelInfo:
    """Return metadata for the model called ``name``."""
    full = full_model_name(name)
    return model_info_from_wire(client._call(ctx, "GET", full, model=name))


__all__ = ["ModelIterator", "get_model"]
