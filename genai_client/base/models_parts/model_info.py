"""
Model metadata DTO returned by the model listing endpoints.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class ModelInfo:
    """Information about a generative language model.

    Attributes:
        name: Resource name, e.g. ``models/gemini-1.5-flash``.
        base_model_id: Base model name, e.g. ``gemini-1.5-flash``.
        version: Major version string.
        display_name: Human-readable name.
        description: Short model description.
        input_token_limit: Maximum prompt tokens.
        output_token_limit: Maximum output tokens.
        supported_generation_methods: RPC method names such as ``generateContent``.
    """

    name: str
    base_model_id: str = ""
    version: str = ""
    display_name: str = ""
    description: str = ""
    input_token_limit: Optional[int] = None
    output_token_limit: Optional[int] = None
    supported_generation_methods: List[str] = field(default_factory=list)
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None


__all__ = ["ModelInfo"]
