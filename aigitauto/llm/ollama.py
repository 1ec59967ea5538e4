"""HTTP client for a local Ollama inference server."""

import logging
from typing import Optional

import httpx

from aigitauto.config import Config
from aigitauto.llm.exceptions import BackendUnavailableError, MalformedResponseError

logger = logging.getLogger(__name__)


class OllamaClient:
    """Client for the Ollama `/api/tags` and `/api/generate` endpoints.

    Each call is a single non-streaming request bounded by the configured
    timeout. There are no retries.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            endpoint: Base URL of the server, e.g. http://localhost:11434.
            timeout: Overall request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: Config, transport: Optional[httpx.BaseTransport] = None) -> "OllamaClient":
        return cls(config.endpoint, timeout=config.timeout, transport=transport)

    def _request(self, method: str, path: str, **kwargs) -> dict:
        """Send a request and decode the JSON body.

        Raises:
            BackendUnavailableError: On connection errors, timeouts, or non-2xx status.
            MalformedResponseError: If the body is not a JSON object.
        """
        url = f"{self.endpoint}{path}"
        logger.debug("%s %s", method, url)

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.request(method, url, **kwargs)
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise BackendUnavailableError(f"Request to {url} timed out after {self.timeout}s: {e}")
        except httpx.HTTPStatusError as e:
            raise BackendUnavailableError(
                f"Ollama API returned status {e.response.status_code}: {e.response.text.strip()}"
            )
        except httpx.HTTPError as e:
            raise BackendUnavailableError(
                f"Ollama is not running or not accessible at {self.endpoint}: {e}\n"
                f"Start it with: ollama serve"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Failed to decode response from {url}: {e}")

        if not isinstance(data, dict):
            raise MalformedResponseError(f"Unexpected response from {url}: {data!r}")
        return data

    def list_models(self) -> list[str]:
        """List the model names available on the server.

        Raises:
            BackendUnavailableError: If the server cannot be reached.
            MalformedResponseError: If the reply has no model list.
        """
        data = self._request("GET", "/api/tags")

        models = data.get("models")
        if not isinstance(models, list):
            raise MalformedResponseError(f"Response has no 'models' list: {data!r}")

        names = []
        for entry in models:
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                raise MalformedResponseError(f"Unexpected model entry: {entry!r}")
            names.append(entry["name"])
        return names

    def generate(self, model: str, prompt: str, temperature: float, max_tokens: int) -> str:
        """Generate text for a prompt.

        Args:
            model: Model name.
            prompt: Prompt text.
            temperature: Sampling temperature.
            max_tokens: Maximum number of tokens to generate (num_predict).

        Returns:
            The generated text with surrounding whitespace removed.

        Raises:
            BackendUnavailableError: If the server cannot be reached.
            MalformedResponseError: If the reply has no text response.
        """
        payload = {
            "model": model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": temperature,
                "num_predict": max_tokens,
            },
        }
        data = self._request("POST", "/api/generate", json=payload)

        text = data.get("response")
        if not isinstance(text, str):
            raise MalformedResponseError(f"Response has no 'response' text: {data!r}")
        return text.strip()
