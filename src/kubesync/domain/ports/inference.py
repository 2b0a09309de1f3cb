"""Port for the structured-output language model."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

type ChatMessage = tuple[str, str]  # (role, text)


@runtime_checkable
class StructuredModel(Protocol):
    """Chat model constrained to a structured output schema.

    Invocation failures are raised. The returned payload is untyped here and is
    validated once at the adapter edge.
    """

    def invoke(self, messages: list[ChatMessage]) -> object: ...
