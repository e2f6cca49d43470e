"""Custom exception classes."""


class RegistrationNotFoundError(Exception):
    """Raised when a registration ID doesn't exist."""
    pass


class PermissionDeniedError(Exception):
    """Raised when a visitor tries to delete someone else's registration."""
    pass
