"""LLM access package.

Architectural role:
    Provides provider configuration, request-payload construction, and the
    HTTP transport used by the pipeline to obtain one completion.

Module split:
    - `provider_config`: environment-driven endpoint, model and key settings.
    - `service`: immutable `ChatRequest` and its JSON payload.
    - `client`: `CompletionClient`, `HttpTransport`, and response parsing.
"""
