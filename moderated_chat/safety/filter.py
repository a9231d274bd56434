"""Rule-based lexical denylist matcher.

Purpose:
    Screen user input before generation and sanitize model output after it,
    using one fixed list of banned terms.

Validation model:
    - Rule-based only (substring matching), no classifier/model inference.
    - Terms are compared case-insensitively as literal strings.
    - `contains_banned` is a boolean gate for input; `moderate` redacts output.

Blocking vs filtering behavior:
    Input is blocked outright by the caller when `contains_banned` is true.
    Output is never blocked: `moderate` replaces every match with
    `REDACTION_MARKER` and the sanitized text is shown.

Known limitation:
    No word-boundary logic is applied. "grapes" matches "rape" and
    "skill" matches "kill". This over-broad behavior is kept as-is.

Determinism:
    For the same input text and term list, output is deterministic.
    No I/O and no module state is mutated.
"""

import re
from dataclasses import dataclass
from typing import Iterable


BANNED_TERMS = (
    "kill",
    "hack",
    "bomb",
    "exploit",
    "violence",
    "rape",
)

REDACTION_MARKER = "[REDACTED]"


@dataclass(frozen=True)
class ModerationVerdict:
    """Outcome of screening one text.

    Attributes:
        is_safe: `False` when at least one term matched the original text.
        text: Input with every matched term replaced by `REDACTION_MARKER`.
    """

    is_safe: bool
    text: str


def contains_banned(text: str, terms: Iterable[str] = BANNED_TERMS) -> bool:
    """Return whether any denylist term occurs in `text` as a substring.

    Args:
        text: Raw text to check.
        terms: Denylist to check against. Defaults to `BANNED_TERMS`.

    Returns:
        `True` on the first case-insensitive substring hit, otherwise `False`.

    Edge cases:
        - Empty/None-like text never matches.
        - Matches inside unrelated words are reported (see module notes).
    """
    if not text:
        return False

    lowered = text.lower()
    return any(term.lower() in lowered for term in terms if term)


def moderate(text: str, terms: Iterable[str] = BANNED_TERMS) -> ModerationVerdict:
    """Redact every case-insensitive occurrence of every denylist term.

    Args:
        text: Text to sanitize, typically a model reply.
        terms: Denylist to apply. Defaults to `BANNED_TERMS`.

    Returns:
        `ModerationVerdict` whose `text` is the redacted copy. `is_safe` is
        `False` iff some term matched.

    Evaluation order:
        Terms are applied one after another on a working copy. A redacted
        span is only matched again by a later term if `REDACTION_MARKER`
        itself contains that term; no guard exists for that case.
    """
    moderated = text or ""
    found = False

    for term in terms:
        if not term:
            continue

        pattern = re.compile(re.escape(term), re.IGNORECASE)
        if pattern.search(moderated):
            found = True
            moderated = pattern.sub(REDACTION_MARKER, moderated)

    return ModerationVerdict(is_safe=not found, text=moderated)
