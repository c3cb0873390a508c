from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionClientProtocol(Protocol):
    """Single prompt-in, text-out call against a chat completion service."""

    def complete(self, prompt: str) -> str:
        """Return the model's text reply, raising on any service failure."""
        ...
