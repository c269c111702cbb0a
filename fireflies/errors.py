"""Exceptions raised by the firefly renderer."""


class FirefliesError(Exception):
    """Base class for renderer errors."""


class InvalidParameter(FirefliesError, ValueError):
    """A light was configured with a value it cannot be rendered from."""


class SurfaceAllocationFailure(FirefliesError, RuntimeError):
    """pygame could not allocate an off-screen surface of the requested size."""

    def __init__(self, width: int, height: int, reason: str = "") -> None:
        self.width = width
        self.height = height
        message = f"cannot allocate {width}x{height} surface"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
