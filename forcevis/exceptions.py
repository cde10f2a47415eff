"""
Exceptions raised around the layout core.

The physics core itself never raises: these cover graph construction
(text / record parsing and adjacency validation), which happens before a
graph ever reaches the engine.
"""

from typing import Any, Dict, Optional


class ForceVisError(Exception):
    """Base exception, carries optional context (file, line, ...)."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({details})"

    def __str__(self) -> str:
        return self._format_message()


class GraphFormatError(ForceVisError):
    """A node/edge record or a TGF line could not be understood."""

    def __init__(self, message: str, line: Optional[int] = None, context=None):
        context = dict(context or {})
        if line is not None:
            context["line"] = line
        self.line = line
        super().__init__(message, context)


class GraphConsistencyError(ForceVisError):
    """Node adjacency sets and the edge table disagree."""
