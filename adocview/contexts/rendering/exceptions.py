"""Exceptions raised by the rendering context."""

from typing import List, Optional


class InitializationError(RuntimeError):
    """
    Raised when the shared rendering engine cannot be constructed.

    Fatal for the construction attempt: no engine is installed, and the next
    caller that needs an engine starts construction again from scratch.
    """


class RenderError(Exception):
    """
    Exception raised when the engine fails to render a document.

    Attributes:
        message: Error description
        name: Name of the document being rendered (filled in by render_document
            when the engine does not know it)
        messages: Diagnostics the engine reported during the failed call
    """

    def __init__(
        self,
        message: str,
        name: Optional[str] = None,
        messages: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.name = name
        self.messages = list(messages or [])

    def __str__(self) -> str:
        parts = [self.message]
        if self.name:
            parts.append(f"Document: {self.name}")
        # Keep the last few engine messages, they usually name the failing line
        for engine_message in self.messages[-5:]:
            parts.append(f"  {engine_message}")
        return "\n".join(parts)
