"""
Content DTO: a producer role plus an ordered list of parts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from .part import Part, Text

ROLE_USER = "user"
ROLE_MODEL = "model"

Role = Literal["user", "model", "function", ""]


@dataclass
class Content:
    """The base structured datatype containing multi-part content of a message.

    Attributes:
        role: The producer of the content, ``"user"`` or ``"model"``. May be
            empty for single-turn requests.
        parts: Ordered parts; order is significant and preserved through merges.
    """

    role: str = ""
    parts: List[Part] = field(default_factory=list)

    def text(self) -> str:
        """Concatenate all text parts, ignoring non-text parts."""
        return "".join(p.text for p in self.parts if isinstance(p, Text))


__all__ = ["Content", "Role", "ROLE_USER", "ROLE_MODEL"]
