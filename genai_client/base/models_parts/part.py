"""
Content part variants.

A ``Part`` is a closed tagged union over a fixed set of frozen dataclasses.
``PART_TYPES`` lists every variant; the wire codec and the merge logic keep a
dispatch entry per variant and the test suite checks the tables stay in sync
with this tuple.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Text:
    """A fragment of plain text."""

    text: str


@dataclass(frozen=True)
class Blob:
    """Inline bytes with a MIME type (e.g. ``image/png``)."""

    mime_type: str
    data: bytes = b""


@dataclass(frozen=True)
class FileData:
    """A reference to previously uploaded file content."""

    mime_type: str
    file_uri: str


@dataclass(frozen=True)
class FunctionCall:
    """A model-issued request to call a declared function."""

    name: str
    args: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FunctionResponse:
    """The caller's result for a :class:`FunctionCall`, sent back to the model."""

    name: str
    response: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ExecutableCode:
    """Code generated by the model for execution."""

    code: str
    language: str = "PYTHON"


@dataclass(frozen=True)
class CodeExecutionResult:
    """Result of executing :class:`ExecutableCode`."""

    outcome: str
    output: str = ""


Part = Union[Text, Blob, FileData, FunctionCall, FunctionResponse, ExecutableCode, CodeExecutionResult]

PART_TYPES = (Text, Blob, FileData, FunctionCall, FunctionResponse, ExecutableCode, CodeExecutionResult)


def image_data(fmt: str, data: bytes) -> Blob:
    """Build an image ``Blob``; ``fmt`` is the MIME subtype such as ``"jpeg"``."""
    return Blob(mime_type=f"image/{fmt}", data=data)


def as_part(value: "Part | str") -> Part:
    """Coerce a plain string to :class:`Text`; pass known parts through."""
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, PART_TYPES):
        return value
    raise TypeError(f"not a content part: {type(value).__name__}")


__all__ = [
    "Text",
    "Blob",
    "FileData",
    "FunctionCall",
    "FunctionResponse",
    "ExecutableCode",
    "CodeExecutionResult",
    "Part",
    "PART_TYPES",
    "image_data",
    "as_part",
]
