"""
Exception types raised by darkroom.
"""


class DarkroomError(Exception):
    """Base exception for darkroom."""
    pass


class DimensionMismatch(DarkroomError, ValueError):
    """Raised when a mask or output buffer does not match the base image size."""

    def __init__(self, what: str, expected, actual):
        self.what = what
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        super().__init__(
            f"{what} has dimensions {self.actual}, expected {self.expected}"
        )


class InvalidAdjustment(DarkroomError, ValueError):
    """Raised when an adjustment value or name is outside its domain."""
    pass
