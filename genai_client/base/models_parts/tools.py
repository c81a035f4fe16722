"""
Function-calling declarations sent with generation requests.

Parameter schemas are supplied by the caller as plain JSON-schema-like
mappings; they are forwarded verbatim.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


@dataclass
class FunctionDeclaration:
    """A function the model may ask the caller to invoke.

    Attributes:
        name: Function name (``a-z``, ``A-Z``, ``0-9``, ``_`` or ``-``; max 63 chars).
        description: Brief description used by the model to decide when to call.
        parameters: Optional parameter schema in the service's OpenAPI subset.
    """

    name: str
    description: str = ""
    parameters: Optional[Dict[str, Any]] = None


@dataclass
class Tool:
    function_declarations: List[FunctionDeclaration] = field(default_factory=list)
    code_execution: bool = False


class FunctionCallingMode(str, Enum):
    UNSPECIFIED = "MODE_UNSPECIFIED"
    AUTO = "AUTO"
    ANY = "ANY"
    NONE = "NONE"


@dataclass
class ToolConfig:
    """Constrains how the model uses the declared tools."""

    mode: FunctionCallingMode = FunctionCallingMode.AUTO
    allowed_function_names: List[str] = field(default_factory=list)


__all__ = ["FunctionDeclaration", "Tool", "FunctionCallingMode", "ToolConfig"]
