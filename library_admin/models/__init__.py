# library_admin/models/__init__.py

from library_admin.extensions import db

from .user_type import UserType
from .user import User
from .admin import Admin

__all__ = ['db', 'UserType', 'User', 'Admin']
