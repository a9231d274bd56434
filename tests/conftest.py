import json

import pytest

from moderated_chat.llm.client import HttpResponse
from moderated_chat.llm.provider_config import ChatConfig


class FakeTransport:
    """Records every POST and replays a canned response or error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, headers, payload, timeout):
        self.calls.append(
            {"url": url, "headers": headers, "payload": payload, "timeout": timeout}
        )
        if self.error is not None:
            raise self.error
        return self.response


class FakeClient:
    """Completion provider double that records whether it was invoked."""

    def __init__(self, reply="", error=None, preflight_error=None):
        self.reply = reply
        self.error = error
        self.preflight_error = preflight_error
        self.messages = []

    def preflight(self):
        if self.preflight_error is not None:
            raise self.preflight_error

    def complete(self, user_message):
        self.messages.append(user_message)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeReader:
    def __init__(self, line="", error=None):
        self.line = line
        self.error = error
        self.prompts = []
        self.closed = False

    def read_line(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.line

    def close(self):
        self.closed = True


def completion_body(content):
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


@pytest.fixture
def config():
    return ChatConfig(api_key="test-key", request_timeout=5.0)


@pytest.fixture
def ok_transport():
    return FakeTransport(HttpResponse(200, completion_body("  Paris is the capital of France.  ")))
