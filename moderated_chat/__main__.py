from moderated_chat.api.cli import run

run()
