"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AIServiceError(DomainException):
    """Generative AI backend failed; message is safe to show to the user"""

    pass


class IntakeNotFoundError(DomainException):
    """No intake record exists for the given id"""

    pass


class InvalidFieldError(DomainException):
    """A form field name or value is not one the intake form accepts"""

    pass
