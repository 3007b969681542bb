"""Exception hierarchy shared across editor components."""

from __future__ import annotations


class FatalEditorError(RuntimeError):
    """Raised when the editor cannot continue safely.

    ``operation`` names the primitive that failed (``tcsetattr``, ``open``),
    ``cause`` is the underlying exception or a short description.
    """

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {describe_cause(cause)}")


def describe_cause(cause: BaseException | str) -> str:
    """Human readable description, preferring ``strerror`` for OS errors."""

    if isinstance(cause, OSError) and cause.strerror:
        return cause.strerror
    return str(cause)


__all__ = ["FatalEditorError", "describe_cause"]
