"""
Safety enumerations and records shared by requests and responses.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class HarmCategory(str, Enum):
    UNSPECIFIED = "HARM_CATEGORY_UNSPECIFIED"
    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"


class HarmProbability(str, Enum):
    UNSPECIFIED = "HARM_PROBABILITY_UNSPECIFIED"
    NEGLIGIBLE = "NEGLIGIBLE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class HarmBlockThreshold(str, Enum):
    UNSPECIFIED = "HARM_BLOCK_THRESHOLD_UNSPECIFIED"
    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_NONE = "BLOCK_NONE"


@dataclass
class SafetyRating:
    """Safety rating for a piece of content."""

    category: HarmCategory
    probability: HarmProbability
    blocked: bool = False


@dataclass
class SafetySetting:
    """Request-side blocking threshold for one harm category."""

    category: HarmCategory
    threshold: HarmBlockThreshold


__all__ = [
    "HarmCategory",
    "HarmProbability",
    "HarmBlockThreshold",
    "SafetyRating",
    "SafetySetting",
]
