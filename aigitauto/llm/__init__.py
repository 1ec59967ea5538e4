"""Inference backend module for aigitauto.

Provides the Ollama client, response parsing, and model annotations.
"""

from aigitauto.llm.exceptions import (
    BackendUnavailableError,
    LLMError,
    MalformedResponseError,
)
from aigitauto.llm.ollama import OllamaClient
from aigitauto.llm.parsing import clean_response, parse_suggestion
from aigitauto.llm.recommend import MODEL_RECOMMENDATIONS, recommend_model


__all__ = [
    "LLMError",
    "BackendUnavailableError",
    "MalformedResponseError",
    "OllamaClient",
    "clean_response",
    "parse_suggestion",
    "MODEL_RECOMMENDATIONS",
    "recommend_model",
]
