"""Exceptions raised by ridgepack."""


class RidgepackError(Exception):
    """Base class for ridgepack errors."""


class ArgumentError(RidgepackError, TypeError):
    """Raised when an operator is called with the wrong arguments."""


class InadmissibleRidgeError(RidgepackError, ValueError):
    """Raised when no physically valid ridge exists for the given setting."""
