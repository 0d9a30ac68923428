"""Chat completion against Gemini via google-genai, with timeout and one retry."""
import logging
import time
from typing import Any, Optional

import httpx
from google import genai
from google.genai import errors
from google.genai import types

from asknote.config import Settings, load_settings
from asknote.errors import RemoteServiceError

logger = logging.getLogger(__name__)


class GeminiChat:
    """
    Minimal single-message chat client.

    Every request carries an explicit HTTP timeout. A retryable failure is
    retried up to settings.max_retries times before RemoteServiceError is
    raised.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Any = None,
        retry_delay_seconds: float = 1.0
    ):
        self.settings = settings or load_settings()
        self._client = client
        self.retry_delay_seconds = retry_delay_seconds

    @property
    def model_name(self) -> str:
        return self.settings.chat_model

    def _get_client(self) -> Any:
        if self._client is None:
            api_key = self.settings.google_api_key
            if not api_key:
                raise RemoteServiceError("GOOGLE_API_KEY not found")
            timeout_ms = int(self.settings.request_timeout_seconds * 1000)
            self._client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout_ms)
            )
        return self._client

    def complete(self, prompt: str, temperature: float) -> Optional[str]:
        """
        Send one user message and return the reply text.

        Returns:
            Reply text, or None if the provider returned no content

        Raises:
            RemoteServiceError: on a non-retryable error or after the last attempt fails
        """
        client = self._get_client()
        attempts = self.settings.max_retries + 1
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                logger.info(f"Calling LLM ({self.model_name}), attempt {attempt}/{attempts}")
                logger.debug(f"PROMPT:\n{prompt}")
                response = client.models.generate_content(
                    model=self.model_name,
                    contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
                    config=types.GenerateContentConfig(temperature=temperature)
                )
                text = response.text
                logger.debug(f"RESPONSE:\n{text}")
                return text
            except Exception as e:
                last_error = e
                logger.warning(f"LLM call failed (attempt {attempt}/{attempts}): {e}")
                if not is_retryable(e):
                    raise RemoteServiceError(f"LLM call failed: {e}") from e
                if attempt < attempts and self.retry_delay_seconds > 0:
                    time.sleep(self.retry_delay_seconds)

        raise RemoteServiceError(f"LLM call failed after {attempts} attempts: {last_error}") from last_error


def is_retryable(error: Exception) -> bool:
    """
    Server errors, rate limiting, and transport or timeout failures are
    retried. Other client errors (bad key, bad request) are not.
    """
    if isinstance(error, errors.ServerError):
        return True
    if isinstance(error, errors.ClientError):
        return error.code == 429
    return isinstance(error, (httpx.TransportError, TimeoutError, ConnectionError))
