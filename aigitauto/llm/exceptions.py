"""LLM-related exception classes.

Contains all exception classes for inference backend operations:
- LLMError: Base exception for LLM-related errors
- BackendUnavailableError: Raised when the inference server cannot be used
- MalformedResponseError: Raised when the server reply cannot be decoded
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class BackendUnavailableError(LLMError):
    """Raised when the endpoint is unreachable, times out, or returns an error status."""

    pass


class MalformedResponseError(LLMError):
    """Raised when the response is not the expected JSON structure."""

    pass
