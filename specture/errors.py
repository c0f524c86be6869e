"""Error taxonomy for Specture.

Parsing is lenient about structural absence; these exceptions cover the
cases that cannot be represented as a validation finding.
"""

from __future__ import annotations

from typing import Optional

__all__ = [
    "SpectureError",
    "InvalidNumberError",
    "SpecNotFoundError",
    "InvalidSpecReferenceError",
]


class SpectureError(ValueError):
    """Base class for all Specture errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path

        full_msg = message
        if path:
            full_msg = f"{path}: {message}"

        super().__init__(full_msg)


class InvalidNumberError(SpectureError):
    """A spec declares a number that cannot be used as an identifier."""

    def __init__(self, value: int, path: Optional[str] = None):
        self.value = value
        super().__init__(
            f"invalid number {value} (must be a non-negative integer)", path
        )


class SpecNotFoundError(SpectureError):
    """No spec file matches the requested reference."""

    def __init__(self, reference: str, path: Optional[str] = None):
        self.reference = reference
        super().__init__(f"spec not found: {reference}", path)


class InvalidSpecReferenceError(SpectureError):
    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(
            f"invalid spec reference: {reference} (expected number like 0, 00, or 000)"
        )
