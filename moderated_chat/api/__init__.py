"""Moderated chat CLI adapter package.

Architectural role:
- Defines the terminal interaction boundary.
- Renders pipeline results; performs no moderation or model logic itself.
"""
