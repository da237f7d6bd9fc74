# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain exceptions — raised by services, translated to HTTP by controllers.
"""


class InsufficientCandidates(ValueError):
    """Raised when a draw is requested with fewer names than roles."""

    def __init__(self, available: int, required: int) -> None:
        self.available = available
        self.required = required
        super().__init__(
            f"Need at least {required} names to start a selection, got {available}"
        )


class StorageUnavailable(RuntimeError):
    """Raised when the roster record cannot be read, written, or decoded."""
