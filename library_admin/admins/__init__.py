# library_admin/admins/__init__.py
"""
Admins blueprint: listing, creating and deleting library administrators.
"""

from flask import Blueprint

bp = Blueprint('admins', __name__, url_prefix='/admins')

from library_admin.admins import routes  # noqa: E402,F401
