"""Custom exceptions for CMJ Kinetics.

The kinetics calculation itself never raises; these cover the store and
command-line layers.
"""


class CmjKineticsError(Exception):
    """Base exception for all CMJ Kinetics errors."""

    pass


class UnauthorizedError(CmjKineticsError):
    """No owning identity was supplied for a store operation."""

    def __init__(self, message: str = "Unauthorized") -> None:
        self.message = message
        super().__init__(self.message)


class RecordValidationError(CmjKineticsError):
    """A record payload failed validation."""

    def __init__(self, message: str = "Invalid record") -> None:
        self.message = message
        super().__init__(self.message)


class RecordNotFoundError(CmjKineticsError):
    """The requested record does not exist for this owner."""

    def __init__(self, message: str = "Measurement not found") -> None:
        self.message = message
        super().__init__(self.message)
