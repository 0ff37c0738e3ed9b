# library_admin/exceptions.py
"""Custom exceptions for the library admin application."""


class LibraryAdminException(Exception):
    """Base exception for all application-specific exceptions."""
    pass


# --- Lookup Exceptions ---

class UserTypeNotFoundError(LibraryAdminException):
    """Raised when a user classification (e.g. staff_admin) doesn't exist."""

    def __init__(self, key):
        super().__init__(f"User type '{key}' not found")
        self.key = key


class AdminNotFoundError(LibraryAdminException):
    """Raised when an admin user doesn't exist or was already deleted."""

    def __init__(self, user_id):
        super().__init__(f"Admin user {user_id} not found")
        self.user_id = user_id


# --- Password Policy Exceptions ---

class PasswordCheckUnavailable(LibraryAdminException):
    """Raised when the compromised-password service cannot be reached."""
    pass
