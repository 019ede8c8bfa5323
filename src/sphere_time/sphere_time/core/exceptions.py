class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PunchSequenceError(ValidationError):
    """A punch is not legal given the employee's last punch."""


class AlreadyCheckedInError(PunchSequenceError):
    pass


class NotCheckedInError(PunchSequenceError):
    pass


class NotWorkingError(PunchSequenceError):
    pass


class NoOpenBreakError(PunchSequenceError):
    pass


class EditWindowError(ValidationError):
    """Raised when a correction moves a punch outside the editable window."""
