"""
Interactive single-turn CLI for moderated chat.

Architectural role:
- Exposes terminal interaction only.
- Delegates all moderation and model access to
  `moderated_chat.core.pipeline.ModerationPipeline`.

Request lifecycle (one run):
1. Print banner and prompt.
2. Read one line through a `LineReader`.
3. Run the pipeline, echoing its status lines.
4. Print the (possibly redacted) reply inside a delimiter block, or the
   failure message, then exit.

Error handling strategy:
- EOF while reading, and keyboard interrupts while reading or waiting on
  the request, end the run without traceback.
- Pipeline failures are already converted to `Blocked` results.
- The line reader is closed on every exit path.

Exit status:
- 0 when a reply was displayed, 1 otherwise.
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
import sys
from typing import Callable, Protocol

from moderated_chat.core.pipeline import ModerationPipeline
from moderated_chat.core.result_types import Blocked, FailureReason
from moderated_chat.llm.client import CompletionClient
from moderated_chat.llm.provider_config import load_config


DELIMITER = "═" * 39

BANNER = (
    "╔════════════════════════════════════════╗\n"
    "║   AI Chat with Moderation System       ║\n"
    "╚════════════════════════════════════════╝\n"
)


class LineReader(Protocol):
    """Source of one line of user text."""

    def read_line(self, prompt: str) -> str:
        ...

    def close(self) -> None:
        ...


class ConsoleLineReader:
    """`LineReader` over the builtin `input`."""

    def __init__(self, input_fn: Callable[[str], str] = input):
        self._input = input_fn
        self.closed = False

    def read_line(self, prompt: str) -> str:
        return self._input(prompt)

    def close(self) -> None:
        self.closed = True


# =========================================================
# UTF-8 SAFE OUTPUT
# Best-effort stdout encoding normalization for interactive terminals.
# =========================================================

def _configure_stdout():
    if hasattr(sys.stdout, "reconfigure"):
        try:
            sys.stdout.reconfigure(encoding="utf-8", errors="ignore")
        except (OSError, ValueError):
            pass


def _configure_logging():
    level = os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def render_result(result, out: Callable[[str], None] = print) -> None:
    """Print a pipeline result in terminal form."""
    if isinstance(result, Blocked):
        if result.reason in (FailureReason.EMPTY_INPUT, FailureReason.INPUT_REJECTED):
            out(f"\n{result.message}\n")
        else:
            out(f"\nAn error occurred: {result.message}")
        return

    verdict = result.verdict
    if not verdict.is_safe:
        out("Warning: Response contained inappropriate content (redacted below)\n")
    else:
        out("Response is safe!\n")

    out(DELIMITER)
    out("AI Response:")
    out(DELIMITER)
    out(verdict.text)
    out(DELIMITER + "\n")


# =========================================================
# MAIN
# =========================================================

def main(reader: LineReader | None = None, client=None, out: Callable[[str], None] = print) -> int:
    """
    Run one moderated chat turn.

    Args:
        reader: Line source. Defaults to `ConsoleLineReader`.
        client: Completion provider. Defaults to `CompletionClient` built
            from the process environment.
        out: Line printer, `print` in production.

    Returns:
        Process exit status.
    """
    reader = reader or ConsoleLineReader()

    try:
        out(BANNER)
        out("Ask me anything (type your question below):\n")

        try:
            question = reader.read_line("You: ")
        except EOFError:
            out("\nNo input received.")
            return 1
        except KeyboardInterrupt:
            out("\nOperation cancelled by user.")
            return 1

        if client is None:
            client = CompletionClient(load_config())

        pipeline = ModerationPipeline(client, reporter=lambda line: out(f"\n{line}"))
        try:
            result = pipeline.run(question)
        except KeyboardInterrupt:
            out("\nOperation cancelled by user.")
            return 1
        render_result(result, out)

        return 1 if isinstance(result, Blocked) else 0
    finally:
        reader.close()


def run():
    """Console-script entrypoint."""
    _configure_stdout()
    _configure_logging()
    sys.exit(main())


if __name__ == "__main__":
    run()
