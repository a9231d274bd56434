"""Core orchestration package.

Architectural role:
    Exposes the single-turn pipeline that sits between the CLI entrypoint and
    the lower-level safety and LLM subsystems.

Composition:
    - `pipeline`: `ModerationPipeline`, the linear state machine.
    - `result_types`: pipeline states and the `Blocked`/`Completed` results.
"""
