"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Numeric input is non-finite or outside the range a calculation accepts"""

    pass


class LeadRecordError(DomainException):
    """Customer record could not be converted into a scoring profile"""

    pass
