"""Prompt-to-payload adapter for LLM invocation.

Architectural role:
    Builds the immutable `ChatRequest` for one user message and renders it to
    the OpenAI-compatible JSON body. Transport lives in
    `moderated_chat.llm.client`.

Token behavior:
    `max_tokens` is fixed by configuration; no prompt-budget trimming is done.
"""

from dataclasses import dataclass

from moderated_chat.llm.provider_config import ChatConfig


@dataclass(frozen=True)
class ChatRequest:
    """One chat-completion request, constructed fresh per call."""

    system_prompt: str
    user_message: str
    model_id: str
    max_tokens: int
    temperature: float

    def to_payload(self) -> dict:
        """Return the wire body `{model, messages, max_tokens, temperature}`."""
        return {
            "model": self.model_id,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": self.user_message},
            ],
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }


def build_chat_request(user_message: str, config: ChatConfig) -> ChatRequest:
    """Wrap the literal user message with the configured persona and defaults.

    The message is forwarded unchanged; no trimming or rewriting happens here.
    """
    return ChatRequest(
        system_prompt=config.system_prompt,
        user_message=user_message,
        model_id=config.model,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )
