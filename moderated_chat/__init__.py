"""Single-turn chat client with denylist moderation around an OpenRouter call."""

__version__ = "0.1.0"
