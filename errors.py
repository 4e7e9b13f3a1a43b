"""Exception hierarchy for the render pipeline."""
from __future__ import annotations


class RenderError(RuntimeError):
    """Base exception for diagram rendering failures."""


class InputError(RenderError):
    """Raised for malformed element JSON or a scene with nothing to draw."""


class InitializationError(RenderError):
    """Raised when the headless page never reports it is ready to render."""


class RenderTimeoutError(RenderError):
    """Raised when rendered content does not become visible in time."""


def exception_hint(exc: BaseException) -> str:
    """Return the first line of the exception message, or its class name."""
    text = str(exc).strip()
    if not text:
        return exc.__class__.__name__
    return text.splitlines()[0].strip()
