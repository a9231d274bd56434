"""Provider/runtime configuration for the LLM layer.

Architectural role:
    Centralizes endpoint, model, generation defaults, and credential lookup
    for `moderated_chat.llm.service` and `moderated_chat.llm.client`.

Model call flow integration:
    - `service.build_chat_request` consumes `SYSTEM_MESSAGE`, `MODEL_NAME`,
      `MAX_TOKENS`, and `TEMPERATURE` (through `ChatConfig`).
    - `client.CompletionClient` consumes the URL, headers, timeout, and key.

Determinism:
    Deterministic for a fixed process environment. Module constants are
    resolved at import time; `load_config` re-reads the environment so tests
    can substitute values with `monkeypatch.setenv`.

Failure behavior:
    A missing key is represented as `None`. The client raises `ConfigError`
    with `MISSING_KEY_MESSAGE` before any network attempt. An unusable
    `CHAT_REQUEST_TIMEOUT` is logged and replaced by the 60 s default.
"""

import logging
import math
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENROUTER_API_KEY"

OPENROUTER_API_URL = os.getenv(
    "OPENROUTER_API_URL", "https://openrouter.ai/api/v1/chat/completions"
)
MODEL_NAME = os.getenv("MODEL_NAME", "deepseek/deepseek-chat")

MAX_TOKENS = 500
TEMPERATURE = 0.7

DEFAULT_REQUEST_TIMEOUT = 60.0


def parse_timeout(raw) -> float:
    """Return a positive timeout in seconds from an environment value.

    Unset, non-numeric, non-finite, and non-positive values fall back to
    `DEFAULT_REQUEST_TIMEOUT` with a warning.
    """
    if raw is None or not str(raw).strip():
        return DEFAULT_REQUEST_TIMEOUT

    try:
        value = float(raw)
    except ValueError:
        logger.warning(
            "Ignoring non-numeric CHAT_REQUEST_TIMEOUT=%r; using %ss", raw, DEFAULT_REQUEST_TIMEOUT
        )
        return DEFAULT_REQUEST_TIMEOUT

    if not math.isfinite(value) or value <= 0:
        logger.warning(
            "Ignoring invalid CHAT_REQUEST_TIMEOUT=%r; using %ss", raw, DEFAULT_REQUEST_TIMEOUT
        )
        return DEFAULT_REQUEST_TIMEOUT

    return value


# Bounded wait for the single upstream call; the transport default is unbounded.
REQUEST_TIMEOUT = parse_timeout(os.getenv("CHAT_REQUEST_TIMEOUT"))

# Descriptive headers required by OpenRouter for app attribution.
HTTP_REFERER = "http://localhost:3000"
APP_TITLE = "AI Chat Moderation App"

SYSTEM_MESSAGE = (
    "You are a helpful, friendly, and safe AI assistant.\n"
    "Your goal is to provide accurate and constructive information.\n"
    "Always be respectful and avoid generating harmful content."
)

MISSING_KEY_MESSAGE = (
    f"{API_KEY_ENV} not found!\n"
    "Please set it as an environment variable:\n"
    f"Windows CMD: set {API_KEY_ENV}=your-key-here\n"
    f'Windows PowerShell: $env:{API_KEY_ENV}="your-key-here"\n'
    f"macOS/Linux (bash, zsh): export {API_KEY_ENV}=your-key-here\n"
    "Then run the script again."
)


@dataclass(frozen=True)
class ChatConfig:
    """Process-wide settings handed to the client at construction.

    Attributes:
        api_key: Bearer credential, or `None` when not configured.
        api_url: Chat-completions endpoint.
        model: Model identifier sent in every request.
        max_tokens: Completion token cap.
        temperature: Sampling temperature.
        request_timeout: Seconds to wait for the upstream response.
        referer: Value of the `HTTP-Referer` header.
        app_title: Value of the `X-Title` header.
        system_prompt: Persona prepended to every request.
    """

    api_key: str | None = None
    api_url: str = OPENROUTER_API_URL
    model: str = MODEL_NAME
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE
    request_timeout: float = REQUEST_TIMEOUT
    referer: str = HTTP_REFERER
    app_title: str = APP_TITLE
    system_prompt: str = SYSTEM_MESSAGE


def load_key():
    """Return the API key from the environment, or `None` when unset/blank."""
    value = os.getenv(API_KEY_ENV, "").strip()
    return value or None


def load_config() -> ChatConfig:
    """Build a `ChatConfig` from the current process environment.

    Relevant environment variables:
        - `OPENROUTER_API_KEY`
        - `OPENROUTER_API_URL`
        - `MODEL_NAME`
        - `CHAT_REQUEST_TIMEOUT`
    """
    return ChatConfig(
        api_key=load_key(),
        api_url=os.getenv("OPENROUTER_API_URL", OPENROUTER_API_URL),
        model=os.getenv("MODEL_NAME", MODEL_NAME),
        request_timeout=parse_timeout(os.getenv("CHAT_REQUEST_TIMEOUT")),
    )
