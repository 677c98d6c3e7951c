class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidArgumentError(ValidationError):
    """Raised when a numeric argument is negative, NaN or infinite."""


class RangeError(DomainError):
    """Raised when a value falls outside its allowed bounds."""


class InvalidRangeError(RangeError):
    """Raised when a period ends before it starts."""


class ConflictError(DomainError):
    """Raised when an operation conflicts with current state. State is left unchanged."""


class DuplicateEmployeeError(ConflictError):
    """Raised when an employee id or email is already on the roster."""


class AlreadyClockedInError(ConflictError):
    """Raised when clocking in an employee who has an open shift."""


class NoActiveShiftError(ConflictError):
    """Raised when clocking out an employee who has no open shift."""


class InvalidTransitionError(ConflictError):
    """Raised when a shift would close before it opened."""


class NotFoundError(DomainError):
    """Raised when an employee id is not on the roster."""


class CorruptionError(DomainError):
    """Raised when persisted data cannot be decoded."""


class UnknownVariantError(CorruptionError):
    """Raised when a persisted employee cannot be mapped to a variant."""


class StorageError(DomainError):
    """Raised when the filesystem fails during save or load."""
