"""Error taxonomy for the completion path.

All failures raised by `moderated_chat.llm.client` derive from `ApiError` so
the orchestrator can catch them at one boundary and turn them into a
user-facing `Blocked` result. User-correctable outcomes (empty input, input
rejected by the denylist) are not exceptions; they are returned as
`FailureReason` values by `moderated_chat.core.pipeline`.
"""


class ChatError(Exception):
    """Base class for all errors raised by this package."""


class ApiError(ChatError):
    """Failure while obtaining a completion from the upstream provider."""


class ConfigError(ApiError):
    """Required configuration (the API credential) is missing.

    Raised before any network attempt. Not retryable.
    """


class HttpError(ApiError):
    """Upstream answered with a non-success HTTP status."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"OpenRouter API Error ({status}): {body}")


class EmptyResponseError(ApiError):
    """Upstream payload had no usable `choices[0].message.content`."""


class TransportError(ApiError):
    """The request never produced an HTTP response (connection, timeout)."""
