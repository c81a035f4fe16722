"""Client surface for the Gemini generative language API.

``Client`` owns the transport (a pooled ``httpx.Client`` wrapped by a
:class:`~genai_client.base.http.Dispatcher`) and hands out model handles:

* :class:`GenerativeModel` for unary and streamed generation, token counting
  and chat sessions;
* :class:`~genai_client.gemini.embed.EmbeddingModel` for embeddings;
* :meth:`Client.list_models` / :meth:`Client.get_model` for model metadata.

A ``Client`` is safe to share between threads; model handles are cheap and
may be configured per use.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

import httpx

from ..base.cancellation import CallContext
from ..base.errors import ErrorCode, ProviderError
from ..base.http import ClientInfo, Dispatcher, get_httpx_client
from ..base.http.headers import API_KEY_HEADER
from ..base.log_support import LogContext
from ..base.logging import get_logger
from ..base.models import (
    ROLE_USER,
    Content,
    CountTokensResponse,
    GenerateContentResponse,
    GenerationConfig,
    Part,
    SafetySetting,
    Tool,
    ToolConfig,
    as_part,
)
from ..base.resilience import DEFAULT_RETRY_CONFIG, RetryConfig
from ..base.serialization import (
    content_to_wire,
    count_tokens_from_wire,
    response_from_wire,
    safety_setting_to_wire,
    tool_config_to_wire,
    tool_to_wire,
)
from ..base.streaming import GenerateContentResponseIterator, HistorySink, check_response
from ..base.timeouts import TimeoutConfig
from ..config import get_client_config
from ..config.defaults import DEFAULT_EMBEDDING_MODEL, HTTP_POOL_PURPOSE, MISSING_API_KEY_ERROR

if TYPE_CHECKING:
    from .chat import ChatSession
    from .embed import EmbeddingModel
    from .get_gemini_models import ModelIterator
    from ..base.models import ModelInfo


def full_model_name(name: str) -> str:
    """Return the resource name for ``name`` (``models/`` prefix added once)."""
    return name if name.startswith("models/") else f"models/{name}"


def new_user_content(parts: Sequence["Part | str"]) -> Content:
    return Content(role=ROLE_USER, parts=[as_part(p) for p in parts])


class Client:
    """Entry point for calls to the generative language service.

    Parameters:
        api_key: API key. Falls back to ``GEMINI_API_KEY``/``GOOGLE_API_KEY``
            and the optional config file.
        base_url: Service root URL override.
        api_version: API version path segment override (``v1beta``).
        http_client: Caller-owned ``httpx.Client``; a pooled one is used when
            omitted. Either way it is never mutated per call.
        retry: Default retry configuration for every call.
        client_info: Identification sent in ``x-goog-api-client``.
        timeouts: Per-attempt timeout configuration.

    Raises:
        ProviderError: ``ErrorCode.AUTH`` when no API key can be resolved.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        retry: Optional[RetryConfig] = None,
        client_info: Optional[ClientInfo] = None,
        timeouts: Optional[TimeoutConfig] = None,
    ) -> None:
        cfg = get_client_config({"api_key": api_key, "base_url": base_url, "api_version": api_version})
        key = cfg.get("api_key")
        if not key:
            raise ProviderError(
                code=ErrorCode.AUTH,
                message=f"{MISSING_API_KEY_ERROR}: pass api_key or set GEMINI_API_KEY",
                attempts=0,
            )
        self._api_key: str = key
        self._base_url: str = str(cfg["base_url"]).rstrip("/")
        self._api_version: str = str(cfg["api_version"]).strip("/")
        self.default_model: str = cfg["model"]
        self._http = http_client or get_httpx_client(self._base_url, HTTP_POOL_PURPOSE)
        self._dispatcher = Dispatcher(
            self._http,
            client_info=client_info,
            retry=retry or DEFAULT_RETRY_CONFIG,
            timeouts=timeouts,
        )
        self._logger = get_logger("gemini")
        self._closed = False

    # Lifecycle ------------------------------------------------------------
    def close(self) -> None:
        """Mark the client closed. Pooled transports stay open for reuse."""
        self._closed = True

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    # Factories ------------------------------------------------------------
    def generative_model(self, name: Optional[str] = None) -> "GenerativeModel":
        return GenerativeModel(self, name or self.default_model)

    def embedding_model(self, name: str = DEFAULT_EMBEDDING_MODEL) -> "EmbeddingModel":
        from .embed import EmbeddingModel

        return EmbeddingModel(self, name)

    def list_models(self, ctx: Optional[CallContext] = None, *, page_size: Optional[int] = None) -> "ModelIterator":
        from .get_gemini_models import ModelIterator

        return ModelIterator(self, ctx, page_size=page_size)

    def get_model(self, name: str, ctx: Optional[CallContext] = None) -> "ModelInfo":
        from .get_gemini_models import get_model

        return get_model(self, name, ctx)

    # Transport helpers ----------------------------------------------------
    def _build_request(
        self,
        method: str,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Request:
        if self._closed:
            raise ProviderError(code=ErrorCode.VALIDATION, message="client is closed", attempts=0)
        url = f"{self._base_url}/{self._api_version}/{path}"
        return self._http.build_request(
            method,
            url,
            json=body,
            params=params,
            headers={API_KEY_HEADER: self._api_key},
        )

    def _call(
        self,
        ctx: Optional[CallContext],
        method: str,
        path: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        model: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Dispatch a unary call and return its decoded JSON object."""
        request = self._build_request(method, path, body=body, params=params)
        log_ctx = LogContext(model=model, method=method, path=request.url.path)
        response = self._dispatcher.send(ctx, request, log_ctx=log_ctx)
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ProviderError(code=ErrorCode.INTERNAL, message="response body is not valid JSON", model=model, raw=exc) from exc
        if not isinstance(data, dict):
            raise ProviderError(code=ErrorCode.INTERNAL, message="response body is not a JSON object", model=model)
        return data

    def _open_stream(
        self,
        ctx: CallContext,
        path: str,
        body: Dict[str, Any],
        *,
        model: Optional[str] = None,
    ) -> httpx.Response:
        request = self._build_request("POST", path, body=body, params={"alt": "sse"})
        log_ctx = LogContext(model=model, method="POST", path=request.url.path)
        return self._dispatcher.send(ctx, request, stream=True, log_ctx=log_ctx)


class GenerativeModel:
    """A handle on one generative model with its request-level settings.

    Attributes:
        name: Model name as given by the caller.
        full_name: Resource name (``models/<name>``).
        generation_config: Optional validated :class:`GenerationConfig`.
        safety_settings: Per-category blocking thresholds.
        tools: Function declarations and other tools offered to the model.
        tool_config: Constraints on tool usage.
        system_instruction: Optional system instruction content.
    """

    def __init__(self, client: Client, name: str) -> None:
        self._client = client
        self.name = name
        self.full_name = full_model_name(name)
        self.generation_config: Optional[GenerationConfig] = None
        self.safety_settings: List[SafetySetting] = []
        self.tools: List[Tool] = []
        self.tool_config: Optional[ToolConfig] = None
        self.system_instruction: Optional[Content] = None

    def _request_body(self, contents: Sequence[Content]) -> Dict[str, Any]:
        body: Dict[str, Any] = {"contents": [content_to_wire(c) for c in contents]}
        if self.safety_settings:
            body["safetySettings"] = [safety_setting_to_wire(s) for s in self.safety_settings]
        if self.generation_config is not None and (gc := self.generation_config.to_wire()):
            body["generationConfig"] = gc
        if self.tools:
            body["tools"] = [tool_to_wire(t) for t in self.tools]
        if self.tool_config is not None:
            body["toolConfig"] = tool_config_to_wire(self.tool_config)
        if self.system_instruction is not None:
            body["systemInstruction"] = content_to_wire(self.system_instruction)
        return body

    def generate_content(self, *parts: "Part | str", ctx: Optional[CallContext] = None) -> GenerateContentResponse:
        """Produce a single response for ``parts``.

        Raises:
            BlockedError: The prompt or a candidate was blocked.
            ProviderError: The call failed.
        """
        return self._generate([new_user_content(parts)], ctx)

    def generate_content_stream(
        self,
        *parts: "Part | str",
        ctx: Optional[CallContext] = None,
        keep_partial: bool = False,
    ) -> GenerateContentResponseIterator:
        """Return an iterator over the partial responses for ``parts``.

        Nothing is sent until the first ``next()``.
        """
        return self._generate_stream([new_user_content(parts)], ctx, keep_partial=keep_partial)

    def count_tokens(self, *parts: "Part | str", ctx: Optional[CallContext] = None) -> CountTokensResponse:
        body = {"contents": [content_to_wire(new_user_content(parts))]}
        data = self._client._call(ctx, "POST", f"{self.full_name}:countTokens", body=body, model=self.name)
        return count_tokens_from_wire(data)

    def start_chat(self, history: Optional[Sequence[Content]] = None) -> "ChatSession":
        from .chat import ChatSession

        return ChatSession(self, history)

    def _generate(self, contents: Sequence[Content], ctx: Optional[CallContext]) -> GenerateContentResponse:
        data = self._client._call(
            ctx, "POST", f"{self.full_name}:generateContent", body=self._request_body(contents), model=self.name
        )
        return check_response(response_from_wire(data))

    def _generate_stream(
        self,
        contents: Sequence[Content],
        ctx: Optional[CallContext],
        *,
        history: Optional[HistorySink] = None,
        keep_partial: bool = False,
    ) -> GenerateContentResponseIterator:
        body = self._request_body(contents)
        path = f"{self.full_name}:streamGenerateContent"

        def opener(call_ctx: CallContext) -> httpx.Response:
            return self._client._open_stream(call_ctx, path, body, model=self.name)

        return GenerateContentResponseIterator(
            opener,
            ctx,
            history=history,
            keep_partial=keep_partial,
            log_ctx=LogContext(model=self.name, method="POST", path=path),
        )


__all__ = ["Client", "GenerativeModel", "full_model_name", "new_user_content"]
