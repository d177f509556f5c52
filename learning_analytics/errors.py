from __future__ import annotations


class PreconditionError(ValueError):
    """Raised when a caller breaks an input contract (e.g. zero total questions)."""


class ExplanationError(RuntimeError):
    """Raised when the generation model fails to explain the weak areas."""
