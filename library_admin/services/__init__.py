"""
Service layer for business logic.

Services are stateless and return OperationResult values for the routes to
map onto responses.
"""

from .results import FailureKind, OperationResult
from .admin_service import AdminService
from .listing import ListingParams, list_admins
from .password_policy import PasswordPolicy

__all__ = [
    'FailureKind',
    'OperationResult',
    'AdminService',
    'ListingParams',
    'list_admins',
    'PasswordPolicy',
]
