"""
Client domain models (DTOs) public surface.

This module re-exports the implementations under
``genai_client.base.models_parts`` to keep a single stable import path.
"""

from .models_parts.part import (
    PART_TYPES,
    Blob,
    CodeExecutionResult,
    ExecutableCode,
    FileData,
    FunctionCall,
    FunctionResponse,
    Part,
    Text,
    as_part,
    image_data,
)
from .models_parts.content import ROLE_MODEL, ROLE_USER, Content, Role
from .models_parts.safety import (
    HarmBlockThreshold,
    HarmCategory,
    HarmProbability,
    SafetyRating,
    SafetySetting,
)
from .models_parts.candidate import Candidate, CitationMetadata, CitationSource, FinishReason
from .models_parts.response import (
    BlockReason,
    CountTokensResponse,
    GenerateContentResponse,
    PromptFeedback,
    UsageMetadata,
)
from .models_parts.tools import FunctionCallingMode, FunctionDeclaration, Tool, ToolConfig
from .models_parts.embedding import (
    BatchEmbedContentsResponse,
    ContentEmbedding,
    EmbedContentResponse,
    EmbedRequest,
    TaskType,
)
from .models_parts.model_info import ModelInfo
from .dto.generation_config import GenerationConfig

__all__ = [
    "PART_TYPES",
    "Part",
    "Text",
    "Blob",
    "FileData",
    "FunctionCall",
    "FunctionResponse",
    "ExecutableCode",
    "CodeExecutionResult",
    "as_part",
    "image_data",
    "Content",
    "Role",
    "ROLE_USER",
    "ROLE_MODEL",
    "HarmCategory",
    "HarmProbability",
    "HarmBlockThreshold",
    "SafetyRating",
    "SafetySetting",
    "FinishReason",
    "CitationSource",
    "CitationMetadata",
    "Candidate",
    "BlockReason",
    "PromptFeedback",
    "UsageMetadata",
    "GenerateContentResponse",
    "CountTokensResponse",
    "FunctionDeclaration",
    "Tool",
    "FunctionCallingMode",
    "ToolConfig",
    "TaskType",
    "ContentEmbedding",
    "EmbedContentResponse",
    "BatchEmbedContentsResponse",
    "EmbedRequest",
    "ModelInfo",
    "GenerationConfig",
]
