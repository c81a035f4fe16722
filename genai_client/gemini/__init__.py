"""Gemini generative language API client surface."""

from .chat import ChatSession
from .client import Client, GenerativeModel, full_model_name
from .embed import EmbeddingBatch, EmbeddingModel
from .get_gemini_models import ModelIterator, get_model

__all__ = [
    "Client",
    "GenerativeModel",
    "ChatSession",
    "EmbeddingModel",
    "EmbeddingBatch",
    "ModelIterator",
    "get_model",
    "full_model_name",
]
