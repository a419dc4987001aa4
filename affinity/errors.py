# affinity/errors.py


class CardError(Exception):
    """Base class for recoverable card mutation failures."""


class ValidationError(CardError):
    pass


class CapacityExceeded(CardError):
    pass


class OutOfRange(CardError):
    pass


class AlreadyClaimed(CardError):
    pass
