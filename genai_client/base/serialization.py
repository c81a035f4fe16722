"""Wire codec between service JSON (camelCase) and the dataclass models.

Part variants are encoded and decoded through two dispatch tables,
``_PART_ENCODERS`` (keyed by dataclass type) and ``_PART_DECODERS`` (keyed by
the wire field name). Both must cover every entry of ``PART_TYPES``; an
unknown wire shape raises :class:`UnrecognizedPartKind` instead of being
silently dropped.
"""
from __future__ import annotations

import base64
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Type, TypeVar

from .errors import UnrecognizedPartKind
from .models import (
    BatchEmbedContentsResponse,
    Blob,
    Candidate,
    CitationMetadata,
    CitationSource,
    CodeExecutionResult,
    Content,
    ContentEmbedding,
    CountTokensResponse,
    EmbedContentResponse,
    ExecutableCode,
    FileData,
    FinishReason,
    FunctionCall,
    FunctionResponse,
    GenerateContentResponse,
    HarmCategory,
    HarmProbability,
    ModelInfo,
    Part,
    PromptFeedback,
    BlockReason,
    SafetyRating,
    SafetySetting,
    Text,
    Tool,
    ToolConfig,
    UsageMetadata,
)

E = TypeVar("E", bound=Enum)


def _enum(cls: Type[E], value: Any, absent: E, unknown: Optional[E] = None) -> E:
    """Decode an enum by wire value.

    A missing value (proto3 JSON omits defaults) maps to ``absent``; a value
    this client does not know maps to ``unknown`` (or ``absent``).
    """
    if value is None:
        return absent
    try:
        return cls(value)
    except ValueError:
        return unknown if unknown is not None else absent


# ---- Parts -----------------------------------------------------------------

_PART_ENCODERS: Dict[type, Callable[[Any], Dict[str, Any]]] = {
    Text: lambda p: {"text": p.text},
    Blob: lambda p: {
        "inlineData": {"mimeType": p.mime_type, "data": base64.b64encode(p.data).decode("ascii")}
    },
    FileData: lambda p: {"fileData": {"mimeType": p.mime_type, "fileUri": p.file_uri}},
    FunctionCall: lambda p: {"functionCall": {"name": p.name, "args": dict(p.args)}},
    FunctionResponse: lambda p: {"functionResponse": {"name": p.name, "response": dict(p.response)}},
    ExecutableCode: lambda p: {"executableCode": {"language": p.language, "code": p.code}},
    CodeExecutionResult: lambda p: {"codeExecutionResult": {"outcome": p.outcome, "output": p.output}},
}

_PART_DECODERS: Dict[str, Callable[[Any], Part]] = {
    "text": lambda v: Text(v or ""),
    "inlineData": lambda v: Blob(
        mime_type=v.get("mimeType") or "", data=base64.b64decode(v.get("data") or "")
    ),
    "fileData": lambda v: FileData(mime_type=v.get("mimeType") or "", file_uri=v.get("fileUri") or ""),
    "functionCall": lambda v: FunctionCall(name=v.get("name") or "", args=dict(v.get("args") or {})),
    "functionResponse": lambda v: FunctionResponse(
        name=v.get("name") or "", response=dict(v.get("response") or {})
    ),
    "executableCode": lambda v: ExecutableCode(code=v.get("code") or "", language=v.get("language", "PYTHON")),
    "codeExecutionResult": lambda v: CodeExecutionResult(
        outcome=v.get("outcome") or "", output=v.get("output") or ""
    ),
}


def part_to_wire(part: Part) -> Dict[str, Any]:
    encoder = _PART_ENCODERS.get(type(part))
    if encoder is None:
        raise TypeError(f"cannot encode part of type {type(part).__name__}")
    return encoder(part)


def part_from_wire(data: Mapping[str, Any]) -> Part:
    """Decode one wire part; raise :class:`UnrecognizedPartKind` on unknown shapes."""
    for key, decoder in _PART_DECODERS.items():
        if key in data:
            return decoder(data[key])
    keys = sorted(data)
    raise UnrecognizedPartKind(message=f"unrecognized part kind with keys {keys}", keys=keys)


def content_to_wire(content: Content) -> Dict[str, Any]:
    out: Dict[str, Any] = {"parts": [part_to_wire(p) for p in content.parts]}
    if content.role:
        out["role"] = content.role
    return out


def content_from_wire(data: Optional[Mapping[str, Any]]) -> Optional[Content]:
    if data is None:
        return None
    return Content(role=data.get("role") or "", parts=[part_from_wire(p) for p in data.get("parts") or []])


# ---- Responses ---------------------------------------------------------------

def _safety_ratings(items: Optional[List[Mapping[str, Any]]]) -> List[SafetyRating]:
    return [
        SafetyRating(
            category=_enum(HarmCategory, r.get("category"), HarmCategory.UNSPECIFIED),
            probability=_enum(HarmProbability, r.get("probability"), HarmProbability.UNSPECIFIED),
            blocked=bool(r.get("blocked", False)),
        )
        for r in items or []
    ]


def _citation_metadata(data: Optional[Mapping[str, Any]]) -> Optional[CitationMetadata]:
    if data is None:
        return None
    return CitationMetadata(
        citation_sources=[
            CitationSource(
                start_index=s.get("startIndex"),
                end_index=s.get("endIndex"),
                uri=s.get("uri"),
                license=s.get("license"),
            )
            for s in data.get("citationSources") or []
        ]
    )


def candidate_from_wire(data: Mapping[str, Any]) -> Candidate:
    # Proto3 JSON omits zero values, so a missing index means index 0.
    return Candidate(
        index=int(data.get("index") or 0),
        content=content_from_wire(data.get("content")),
        finish_reason=_enum(FinishReason, data.get("finishReason"), FinishReason.UNSPECIFIED, FinishReason.OTHER),
        safety_ratings=_safety_ratings(data.get("safetyRatings")),
        citation_metadata=_citation_metadata(data.get("citationMetadata")),
        token_count=data.get("tokenCount"),
    )


def response_from_wire(data: Mapping[str, Any]) -> GenerateContentResponse:
    feedback = data.get("promptFeedback")
    usage = data.get("usageMetadata")
    return GenerateContentResponse(
        candidates=[candidate_from_wire(c) for c in data.get("candidates") or []],
        prompt_feedback=(
            PromptFeedback(
                block_reason=_enum(BlockReason, feedback.get("blockReason"), BlockReason.UNSPECIFIED, BlockReason.OTHER),
                safety_ratings=_safety_ratings(feedback.get("safetyRatings")),
            )
            if feedback is not None
            else None
        ),
        usage_metadata=(
            UsageMetadata(
                prompt_token_count=usage.get("promptTokenCount"),
                candidates_token_count=usage.get("candidatesTokenCount"),
                total_token_count=usage.get("totalTokenCount"),
                cached_content_token_count=usage.get("cachedContentTokenCount"),
            )
            if usage is not None
            else None
        ),
    )


def count_tokens_from_wire(data: Mapping[str, Any]) -> CountTokensResponse:
    return CountTokensResponse(total_tokens=int(data.get("totalTokens") or 0))


def embed_content_from_wire(data: Mapping[str, Any]) -> EmbedContentResponse:
    emb = data.get("embedding")
    return EmbedContentResponse(
        embedding=ContentEmbedding(values=list(emb.get("values") or [])) if emb is not None else None
    )


def batch_embed_from_wire(data: Mapping[str, Any]) -> BatchEmbedContentsResponse:
    return BatchEmbedContentsResponse(
        embeddings=[ContentEmbedding(values=list(e.get("values") or [])) for e in data.get("embeddings") or []]
    )


def model_info_from_wire(data: Mapping[str, Any]) -> ModelInfo:
    return ModelInfo(
        name=data.get("name") or "",
        base_model_id=data.get("baseModelId") or "",
        version=data.get("version") or "",
        display_name=data.get("displayName") or "",
        description=data.get("description") or "",
        input_token_limit=data.get("inputTokenLimit"),
        output_token_limit=data.get("outputTokenLimit"),
        supported_generation_methods=list(data.get("supportedGenerationMethods") or []),
        temperature=data.get("temperature"),
        top_p=data.get("topP"),
        top_k=data.get("topK"),
    )


# ---- Request pieces ----------------------------------------------------------

def safety_setting_to_wire(setting: SafetySetting) -> Dict[str, Any]:
    return {"category": setting.category.value, "threshold": setting.threshold.value}


def tool_to_wire(tool: Tool) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if tool.function_declarations:
        decls = []
        for fd in tool.function_declarations:
            d: Dict[str, Any] = {"name": fd.name, "description": fd.description}
            if fd.parameters is not None:
                d["parameters"] = fd.parameters
            decls.append(d)
        out["functionDeclarations"] = decls
    if tool.code_execution:
        out["codeExecution"] = {}
    return out


def tool_config_to_wire(config: ToolConfig) -> Dict[str, Any]:
    fcc: Dict[str, Any] = {"mode": config.mode.value}
    if config.allowed_function_names:
        fcc["allowedFunctionNames"] = list(config.allowed_function_names)
    return {"functionCallingConfig": fcc}


__all__ = [
    "part_to_wire",
    "part_from_wire",
    "content_to_wire",
    "content_from_wire",
    "candidate_from_wire",
    "response_from_wire",
    "count_tokens_from_wire",
    "embed_content_from_wire",
    "batch_embed_from_wire",
    "model_info_from_wire",
    "safety_setting_to_wire",
    "tool_to_wire",
    "tool_config_to_wire",
]
