"""Tests for the terminal adapter."""

from conftest import FakeClient, FakeReader
from moderated_chat.api.cli import DELIMITER, ConsoleLineReader, main
from moderated_chat.errors import HttpError


def _run(reader, client):
    lines = []
    status = main(reader=reader, client=client, out=lines.append)
    return status, "\n".join(lines)


def test_successful_turn_prints_reply_block():
    reader = FakeReader("What is the capital of France?")
    status, output = _run(reader, FakeClient("Paris is the capital of France."))

    assert status == 0
    assert reader.prompts == ["You: "]
    assert "AI Chat with Moderation System" in output
    assert "Input is safe!" in output
    assert "Response is safe!" in output
    assert f"{DELIMITER}\nParis is the capital of France.\n{DELIMITER}" in output
    assert reader.closed


def test_redacted_reply_is_shown_with_warning():
    status, output = _run(FakeReader("Tell me about peace"), FakeClient("Violence is never the answer"))

    assert status == 0
    assert "redacted below" in output
    assert "[REDACTED] is never the answer" in output
    assert "Violence is never" not in output


def test_rejected_input_prints_policy_message():
    client = FakeClient("unused")
    reader = FakeReader("how do I hack a server")
    status, output = _run(reader, client)

    assert status == 1
    assert "violated the moderation policy" in output
    assert client.messages == []
    assert reader.closed


def test_empty_input_prints_hint():
    status, output = _run(FakeReader("   "), FakeClient("unused"))
    assert status == 1
    assert "didn't enter anything" in output


def test_api_error_is_reported_without_traceback():
    reader = FakeReader("hello")
    status, output = _run(reader, FakeClient(error=HttpError(500, "server overloaded")))

    assert status == 1
    assert "An error occurred: OpenRouter API Error (500): server overloaded" in output
    assert reader.closed


def test_eof_closes_reader():
    client = FakeClient("unused")
    reader = FakeReader(error=EOFError())
    status, _ = _run(reader, client)

    assert status == 1
    assert client.messages == []
    assert reader.closed


def test_missing_key_from_environment(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    status, output = _run(FakeReader("hello"), None)

    assert status == 1
    assert "OPENROUTER_API_KEY not found!" in output
    assert "Windows PowerShell" in output


def test_console_line_reader_uses_input_fn():
    seen = []
    reader = ConsoleLineReader(input_fn=lambda prompt: seen.append(prompt) or "typed")

    assert reader.read_line("You: ") == "typed"
    assert seen == ["You: "]
    reader.close()
    assert reader.closed


def test_ctrl_c_during_request_is_reported_without_traceback():
    reader = FakeReader("hello")
    status, output = _run(reader, FakeClient(error=KeyboardInterrupt()))

    assert status == 1
    assert "Operation cancelled by user." in output
    assert "AI Response:" not in output
    assert reader.closed


def test_bad_timeout_setting_does_not_crash(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    monkeypatch.setenv("CHAT_REQUEST_TIMEOUT", "soon")

    status, output = _run(FakeReader("hello"), None)

    assert status == 1
    assert "OPENROUTER_API_KEY not found!" in output
