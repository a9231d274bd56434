"""Pipeline state and result contracts for `moderated_chat.core.pipeline`.

Architectural role:
    Defines the states the orchestrator moves through and the two result
    shapes handed to display logic.

Control-flow interaction:
    `ModerationPipeline.run` returns exactly one of `Blocked` or `Completed`.
    The CLI inspects the type to choose status and exit code.

Determinism:
    The data classes are purely structural and state-free.
"""

from dataclasses import dataclass
from enum import Enum

from moderated_chat.safety.filter import ModerationVerdict


class PipelineState(str, Enum):
    """Linear run states. `FAILED` is absorbing and reachable from any state."""

    AWAITING_INPUT = "awaiting_input"
    INPUT_CHECK = "input_check"
    CALLING = "calling"
    OUTPUT_CHECK = "output_check"
    DONE = "done"
    FAILED = "failed"


class FailureReason(str, Enum):
    EMPTY_INPUT = "empty_input"
    INPUT_REJECTED = "input_rejected"
    CONFIG_ERROR = "config_error"
    HTTP_ERROR = "http_error"
    EMPTY_RESPONSE = "empty_response"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class Blocked:
    """Run ended before a reply could be displayed.

    Attributes:
        reason: Which gate or failure stopped the run.
        message: User-facing explanation, printed verbatim.
        error: Underlying exception for client failures, else `None`.
    """

    reason: FailureReason
    message: str
    error: Exception | None = None


@dataclass(frozen=True)
class Completed:
    """Run reached `DONE`; `verdict.text` is what gets displayed."""

    verdict: ModerationVerdict


PipelineResult = Blocked | Completed
