class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``errors`` maps a field name to the list of messages for that field.
    """

    def __init__(self, errors: dict[str, list[str]], message: str = "The given data was invalid."):
        super().__init__(message)
        self.message = message
        self.errors = errors


class DuplicateNameError(ValidationError):
    """Raised when an attribute name is already taken within its project."""

    def __init__(self, name: str):
        super().__init__({"name": ["This attribute name already exists in this project."]})
        self.name = name


class NotFoundOrForbidden(DomainError):
    """Raised when an entity is missing or the requester may not see it."""

    def __init__(self, message: str = "Not found."):
        super().__init__(message)
        self.message = message


class AuthenticationError(DomainError):
    """Raised when login credentials or bearer tokens are invalid."""

    def __init__(self, message: str = "Unauthenticated."):
        super().__init__(message)
        self.message = message
