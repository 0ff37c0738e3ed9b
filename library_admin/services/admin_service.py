"""
Admin Service - Creates and deletes administrator accounts.

Store and lookup failures are classified into an OperationResult instead of
propagating to the route.
"""

import logging
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import generate_password_hash

from library_admin.extensions import db
from library_admin.exceptions import AdminNotFoundError, UserTypeNotFoundError
from library_admin.logging_config import scrub_context
from library_admin.models import Admin, User, UserType
from library_admin.services.results import FailureKind, OperationResult

logger = logging.getLogger(__name__)

CREATE_MESSAGES = {
    FailureKind.NOT_FOUND: 'Admin user type not found. Please contact system administrator.',
    FailureKind.STORE: 'Database error occurred while creating the admin. Please try again.',
    FailureKind.UNCLASSIFIED: 'An unexpected error occurred. Please try again or contact support.',
}

DELETE_MESSAGES = {
    FailureKind.NOT_FOUND: 'Admin not found.',
    FailureKind.STORE: 'An error occurred while deleting the admin.',
    FailureKind.UNCLASSIFIED: 'An error occurred while deleting the admin.',
}

USER_FIELDS = ('library_id', 'first_name', 'middle_initial', 'last_name', 'sex', 'contact_number', 'email')


class AdminService:
    """Service for managing administrator accounts."""

    @staticmethod
    def get_user_type(key):
        """Look up a user type by key, raising UserTypeNotFoundError if absent."""
        user_type = UserType.find_by_key(key)
        if user_type is None:
            raise UserTypeNotFoundError(key)
        return user_type

    @staticmethod
    def get_active_user(user_id):
        """Look up a user that hasn't been soft-deleted, raising AdminNotFoundError if absent."""
        user = db.session.scalar(
            db.select(User).where(User.id == user_id, User.is_deleted == False)  # noqa: E712
        )
        if user is None:
            raise AdminNotFoundError(user_id)
        return user

    @staticmethod
    def create_admin(data, staff_admin_key='staff_admin'):
        """
        Create a staff admin user and its admin profile in one transaction.

        Args:
            data: validated fields (library_id, first_name, middle_initial,
                last_name, sex, contact_number, email, role_title, password)
            staff_admin_key: key of the user type stamped on the new user

        Returns:
            OperationResult whose value is the new User on success
        """
        context = {'request_data': scrub_context(data)}

        try:
            admin_type = AdminService.get_user_type(staff_admin_key)

            user = User(
                library_id=int(data['library_id']),
                first_name=data['first_name'],
                middle_initial=data.get('middle_initial') or None,
                last_name=data['last_name'],
                sex=data['sex'],
                contact_number=data.get('contact_number') or None,
                email=data['email'],
                password=generate_password_hash(data['password']),
                user_type_id=admin_type.id,
            )
            db.session.add(user)
            db.session.flush()

            user.admin = Admin(role_title=data['role_title'])
            db.session.flush()

            db.session.commit()
            logger.info(f"Created admin user {user.id} (library_id={user.library_id})")
            return OperationResult.success(user, 'You successfully created a new Admin')

        except UserTypeNotFoundError as e:
            db.session.rollback()
            return OperationResult.failure(FailureKind.NOT_FOUND, CREATE_MESSAGES[FailureKind.NOT_FOUND],
                                           context=context, exception=e)
        except SQLAlchemyError as e:
            db.session.rollback()
            return OperationResult.failure(FailureKind.STORE, CREATE_MESSAGES[FailureKind.STORE],
                                           context=context, exception=e)
        except Exception as e:
            db.session.rollback()
            return OperationResult.failure(FailureKind.UNCLASSIFIED, CREATE_MESSAGES[FailureKind.UNCLASSIFIED],
                                           context=context, exception=e)

    @staticmethod
    def delete_admin(user_id):
        """Soft-delete a user. Returns an OperationResult whose value is the deleted User."""
        context = {'user_id': user_id}

        try:
            user = AdminService.get_active_user(user_id)
            user.soft_delete()
            db.session.commit()
            logger.info(f"Soft-deleted admin user {user_id}")
            return OperationResult.success(user, 'Admin deleted successfully')

        except AdminNotFoundError as e:
            db.session.rollback()
            return OperationResult.failure(FailureKind.NOT_FOUND, DELETE_MESSAGES[FailureKind.NOT_FOUND],
                                           context=context, exception=e)
        except SQLAlchemyError as e:
            db.session.rollback()
            return OperationResult.failure(FailureKind.STORE, DELETE_MESSAGES[FailureKind.STORE],
                                           context=context, exception=e)
        except Exception as e:
            db.session.rollback()
            return OperationResult.failure(FailureKind.UNCLASSIFIED, DELETE_MESSAGES[FailureKind.UNCLASSIFIED],
                                           context=context, exception=e)
