"""Single-turn moderation pipeline.

Architectural role:
    Drives one user message through the input gate, the completion client,
    and output redaction, and returns a `PipelineResult` for display.

Control-flow model:
    AWAITING_INPUT -> INPUT_CHECK -> CALLING -> OUTPUT_CHECK -> DONE
    Any stage may move to FAILED, which ends the run.

    1. Empty/whitespace input -> `Blocked(EMPTY_INPUT)`.
    2. Input containing a denylist term -> `Blocked(INPUT_REJECTED)`; the
       client is never called.
    3. Client pre-flight (credential, timeout), then one request. Any
       `ApiError` from the client -> `Blocked(<reason>)` carrying the
       error's own message.
    4. Output is redacted, never suppressed -> `Completed(verdict)`.

Error handling strategy:
    Client errors are caught here and converted to results; nothing from the
    completion path escapes `run`. No retries.

Side effects:
    At most one call to `client.complete` per run. Status lines are passed to
    the optional `reporter` callback; this module does not print.
"""

import logging
from typing import Callable, Iterable, Protocol

from moderated_chat.core.result_types import (
    Blocked,
    Completed,
    FailureReason,
    PipelineResult,
    PipelineState,
)
from moderated_chat.errors import (
    ApiError,
    ConfigError,
    EmptyResponseError,
    HttpError,
    TransportError,
)
from moderated_chat.safety.filter import BANNED_TERMS, contains_banned, moderate


logger = logging.getLogger(__name__)

EMPTY_INPUT_MESSAGE = "You didn't enter anything. Please try again."
INPUT_REJECTED_MESSAGE = (
    "Your input violated the moderation policy.\n"
    "Please rephrase your question without harmful content."
)

_ERROR_REASONS = (
    (ConfigError, FailureReason.CONFIG_ERROR),
    (HttpError, FailureReason.HTTP_ERROR),
    (EmptyResponseError, FailureReason.EMPTY_RESPONSE),
    (TransportError, FailureReason.TRANSPORT_ERROR),
)


class CompletionProvider(Protocol):
    """Anything that turns one user message into reply text."""

    def preflight(self) -> None:
        """Raise `ConfigError` when the provider cannot send a request."""
        ...

    def complete(self, user_message: str) -> str:
        ...


def _reason_for(err: ApiError) -> FailureReason:
    for error_type, reason in _ERROR_REASONS:
        if isinstance(err, error_type):
            return reason
    return FailureReason.TRANSPORT_ERROR


class ModerationPipeline:
    """Orchestrates one moderated completion.

    Args:
        client: Completion provider, usually `CompletionClient`.
        terms: Denylist shared by the input gate and output redaction.
        reporter: Optional callback receiving one status line per stage.
    """

    def __init__(
        self,
        client: CompletionProvider,
        terms: Iterable[str] = BANNED_TERMS,
        reporter: Callable[[str], None] | None = None,
    ):
        self.client = client
        self.terms = tuple(terms)
        self.reporter = reporter
        self.state = PipelineState.AWAITING_INPUT

    def _report(self, line: str) -> None:
        if self.reporter is not None:
            self.reporter(line)

    def _enter(self, state: PipelineState) -> None:
        logger.debug("pipeline state %s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, reason: FailureReason, message: str, error: Exception | None = None) -> Blocked:
        self._enter(PipelineState.FAILED)
        return Blocked(reason=reason, message=message, error=error)

    def run(self, user_text: str | None) -> PipelineResult:
        """Process one line of user text and return the display result."""
        self.state = PipelineState.AWAITING_INPUT

        if not user_text or not user_text.strip():
            logger.info("Empty input; nothing sent")
            return self._fail(FailureReason.EMPTY_INPUT, EMPTY_INPUT_MESSAGE)

        self._enter(PipelineState.INPUT_CHECK)
        self._report("Checking your input for safety...")

        # Raw text is checked, the same text is forwarded.
        if contains_banned(user_text, self.terms):
            logger.info("Input rejected by denylist")
            return self._fail(FailureReason.INPUT_REJECTED, INPUT_REJECTED_MESSAGE)

        self._report("Input is safe!")

        self._enter(PipelineState.CALLING)

        try:
            self.client.preflight()
            self._report("Sending request to OpenRouter...")
            reply = self.client.complete(user_text)
        except ApiError as err:
            reason = _reason_for(err)
            logger.warning("Completion failed (%s): %s", reason.value, err)
            return self._fail(reason, str(err), err)

        self._enter(PipelineState.OUTPUT_CHECK)
        self._report("Checking AI response for safety...")
        verdict = moderate(reply, self.terms)

        if not verdict.is_safe:
            logger.info("Model reply contained denylist terms; redacted")

        self._enter(PipelineState.DONE)
        return Completed(verdict=verdict)
