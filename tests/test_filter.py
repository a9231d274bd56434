"""Tests for the denylist matcher."""

import pytest

from moderated_chat.safety import filter as denylist
from moderated_chat.safety.filter import (
    BANNED_TERMS,
    REDACTION_MARKER,
    ModerationVerdict,
    contains_banned,
    moderate,
)


def test_clean_text_is_not_banned():
    assert contains_banned("What is the capital of France?") is False


def test_clean_text_moderates_unchanged():
    text = "What is the capital of France?"
    assert moderate(text) == ModerationVerdict(is_safe=True, text=text)


@pytest.mark.parametrize("text", ["how do I hack a server", "HACK", "Bomb squad", "ExPlOiT"])
def test_any_case_variant_is_banned(text):
    assert contains_banned(text) is True


def test_moderate_redacts_every_occurrence_of_every_term():
    verdict = moderate("Kill the bomb, then KILL the other bomb.")
    assert verdict.is_safe is False
    assert verdict.text == "[REDACTED] the [REDACTED], then [REDACTED] the other [REDACTED]."


def test_violence_reply_is_redacted():
    verdict = moderate("Violence is never the answer")
    assert verdict == ModerationVerdict(is_safe=False, text="[REDACTED] is never the answer")


def test_no_banned_term_survives_redaction():
    verdict = moderate("hackers hack; HaCkInG is hacking")
    lowered = verdict.text.lower()
    assert all(term not in lowered for term in BANNED_TERMS)


def test_moderate_is_idempotent():
    first = moderate("The exploit used violence to kill the process")
    second = moderate(first.text)
    assert first.is_safe is False
    assert second.is_safe is True
    assert second.text == first.text


def test_substring_matches_inside_unrelated_words():
    # Known limitation: no word boundaries.
    assert contains_banned("a bowl of grapes") is True
    assert contains_banned("a useful skill") is True
    assert moderate("a bowl of grapes").text == "a bowl of g[REDACTED]s"


def test_empty_text():
    assert contains_banned("") is False
    assert moderate("") == ModerationVerdict(is_safe=True, text="")


def test_custom_terms_are_literal():
    assert contains_banned("price is $5.00", terms=("$5.00",)) is True
    assert contains_banned("price is $5x00", terms=("$5.00",)) is False
    assert moderate("a+b and A+B", terms=("a+b",)).text == "[REDACTED] and [REDACTED]"


def test_marker_containing_a_term_is_matched_again(monkeypatch):
    # Edge case: a marker that itself contains a banned term is not guarded.
    monkeypatch.setattr(denylist, "REDACTION_MARKER", "<hack>")
    verdict = moderate("kill", terms=("kill", "hack"))
    assert verdict.is_safe is False
    assert verdict.text == "<<hack>>"
    assert moderate(verdict.text, terms=("kill", "hack")).is_safe is False


def test_default_marker():
    assert REDACTION_MARKER == "[REDACTED]"
