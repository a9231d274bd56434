"""Safety package.

This package contains the rule-based denylist matcher used by orchestration
to decide whether a user request may reach the model and to sanitize the
model's reply before display.
"""
