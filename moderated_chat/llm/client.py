"""Transport client for OpenRouter chat-completion requests.

Architectural role:
    Executes the single HTTP request of a pipeline run and normalizes the
    response into either the assistant text or a typed `ApiError`.

Model invocation flow:
    `CompletionClient.complete(message)` -> credential pre-flight ->
    `service.build_chat_request` -> `HttpTransport.post` -> status check ->
    JSON parse -> `choices[0].message.content`.

Retry behavior:
    No retry loop is implemented. Each call is attempted once with the
    configured timeout (`ChatConfig.request_timeout`).

Failure handling model:
    Failures are raised as typed errors, one per outcome:
        - missing key or bad timeout -> `ConfigError` (no network attempt)
        - connection/timeout -> `TransportError`
        - non-2xx status -> `HttpError(status, body)`
        - missing/empty/non-JSON content -> `EmptyResponseError`
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Protocol

import requests

from moderated_chat.errors import (
    ConfigError,
    EmptyResponseError,
    HttpError,
    TransportError,
)
from moderated_chat.llm.provider_config import MISSING_KEY_MESSAGE, ChatConfig
from moderated_chat.llm.service import build_chat_request


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Minimal response view shared by real and fake transports."""

    status_code: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)


class HttpTransport(Protocol):
    """Blocking POST interface required by `CompletionClient`."""

    def post(self, url: str, headers: dict, payload: dict, timeout: float) -> HttpResponse:
        """Send `payload` as JSON and return the raw status and body."""
        ...


class RequestsTransport:
    """`HttpTransport` backed by `requests.post`."""

    def post(self, url: str, headers: dict, payload: dict, timeout: float) -> HttpResponse:
        try:
            response = requests.post(
                url,
                headers=headers,
                json=payload,
                timeout=timeout,
            )
        except requests.exceptions.Timeout as err:
            raise TransportError(f"Request to {url} timed out after {timeout}s") from err
        except requests.exceptions.RequestException as err:
            raise TransportError(f"Request to {url} failed: {err}") from err

        response.encoding = "utf-8"
        return HttpResponse(status_code=response.status_code, text=response.text)


def _extract_content(data: Any) -> str | None:
    """Return `choices[0].message.content` or `None` when the path is absent."""
    if not isinstance(data, dict):
        return None

    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None

    first = choices[0]
    if not isinstance(first, dict):
        return None

    message = first.get("message")
    if not isinstance(message, dict):
        return None

    content = message.get("content")
    if not isinstance(content, str):
        return None
    return content


class CompletionClient:
    """Single-shot chat-completion client.

    Args:
        config: Endpoint, model, generation defaults, and credential.
        transport: HTTP implementation. Defaults to `RequestsTransport`.
    """

    def __init__(self, config: ChatConfig, transport: HttpTransport | None = None):
        self.config = config
        self.transport = transport or RequestsTransport()

    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
            "HTTP-Referer": self.config.referer,
            "X-Title": self.config.app_title,
        }

    def preflight(self) -> None:
        """Check local configuration without touching the network.

        Raises:
            ConfigError: No API key, or a timeout that is not a positive number.
        """
        if not self.config.api_key:
            raise ConfigError(MISSING_KEY_MESSAGE)
        timeout = self.config.request_timeout
        if not math.isfinite(timeout) or timeout <= 0:
            raise ConfigError(
                f"Request timeout must be a positive number of seconds, "
                f"got {timeout!r}."
            )

    def complete(self, user_message: str) -> str:
        """Send one user message and return the trimmed assistant reply.

        Raises:
            ConfigError: Invalid local configuration. Raised before any I/O.
            TransportError: The request could not be completed.
            HttpError: Upstream returned a non-success status.
            EmptyResponseError: No usable content in the response.
        """
        self.preflight()

        request = build_chat_request(user_message, self.config)

        logger.debug(
            "POST %s model=%s max_tokens=%d temperature=%s",
            self.config.api_url,
            request.model_id,
            request.max_tokens,
            request.temperature,
        )

        response = self.transport.post(
            self.config.api_url,
            headers=self._headers(),
            payload=request.to_payload(),
            timeout=self.config.request_timeout,
        )

        if not response.ok:
            logger.warning("Upstream returned HTTP %d", response.status_code)
            raise HttpError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as err:
            raise EmptyResponseError("No response content from OpenRouter") from err

        content = _extract_content(data)
        if not content or not content.strip():
            logger.warning("Upstream response had no message content")
            raise EmptyResponseError("No response content from OpenRouter")

        return content.strip()
