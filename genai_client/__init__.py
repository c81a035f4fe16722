"""genai_client package

Client library for the Gemini generative language API.

Public API (re-exported):
    - Version: ``__version__``
    - Client surface: :class:`Client`, :class:`GenerativeModel`,
      :class:`ChatSession`, :class:`EmbeddingModel`
    - Call control: :class:`CallContext`, :class:`RetryConfig` and the
      backoff policies
    - Exceptions: :class:`ProviderError`, :class:`ServiceError`,
      :class:`BlockedError`, :class:`CancelledError`,
      :class:`DeadlineExceededError`, :class:`ErrorCode`
    - Data model: contents, parts and response DTOs

Example::

    from genai_client import CallContext, Client

    client = Client()
    model = client.generative_model("gemini-1.5-flash")
    ctx = CallContext.background().with_timeout(30)
    for partial in model.generate_content_stream("Tell me a story", ctx=ctx):
        print(partial.text(), end="")
"""

from .version import __version__
from .base.cancellation import CallContext, CancellationToken, CancelledError, DeadlineExceededError
from .base.errors import (
    BlockedError,
    ErrorCode,
    NonResendableBodyError,
    ProviderError,
    ServiceError,
    UnrecognizedPartKind,
)
from .base.http import ClientInfo
from .base.logging import configure_logger, get_logger
from .base.models import (
    Blob,
    Candidate,
    CodeExecutionResult,
    Content,
    ExecutableCode,
    FileData,
    FinishReason,
    FunctionCall,
    FunctionDeclaration,
    FunctionResponse,
    GenerateContentResponse,
    GenerationConfig,
    HarmBlockThreshold,
    HarmCategory,
    SafetySetting,
    TaskType,
    Text,
    Tool,
    ToolConfig,
    image_data,
)
from .base.resilience import ExponentialBackoff, NoPauseBackoff, PauseOneSecond, RetryConfig
from .base.streaming import GenerateContentResponseIterator
from .gemini import ChatSession, Client, EmbeddingBatch, EmbeddingModel, GenerativeModel, ModelIterator

__all__ = [
    "__version__",
    # Client surface
    "Client",
    "GenerativeModel",
    "ChatSession",
    "EmbeddingModel",
    "EmbeddingBatch",
    "ModelIterator",
    "GenerateContentResponseIterator",
    "ClientInfo",
    # Call control
    "CallContext",
    "CancellationToken",
    "RetryConfig",
    "ExponentialBackoff",
    "NoPauseBackoff",
    "PauseOneSecond",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ServiceError",
    "NonResendableBodyError",
    "UnrecognizedPartKind",
    "BlockedError",
    "CancelledError",
    "DeadlineExceededError",
    # Logging
    "get_logger",
    "configure_logger",
    # Data model
    "Text",
    "Blob",
    "FileData",
    "FunctionCall",
    "FunctionResponse",
    "ExecutableCode",
    "CodeExecutionResult",
    "Content",
    "Candidate",
    "FinishReason",
    "GenerateContentResponse",
    "GenerationConfig",
    "SafetySetting",
    "HarmCategory",
    "HarmBlockThreshold",
    "Tool",
    "FunctionDeclaration",
    "ToolConfig",
    "TaskType",
    "image_data",
]
