# library_admin/models/user.py

from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import CheckConstraint

from . import db
from library_admin.mixins import SoftDeleteMixin


class User(SoftDeleteMixin, UserMixin, db.Model):
    """A library account holder (patron, faculty, staff or administrator)."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    library_id = db.Column(db.BigInteger, unique=True, index=True, nullable=False)

    first_name = db.Column(db.String(50), nullable=False, index=True)
    middle_initial = db.Column(db.String(1), nullable=True)
    last_name = db.Column(db.String(50), nullable=False, index=True)
    sex = db.Column(db.String(1), nullable=False)
    contact_number = db.Column(db.String(30), nullable=True)
    email = db.Column(db.String(255), unique=True, index=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)  # Hashed, never plaintext

    user_type_id = db.Column(db.Integer, db.ForeignKey('user_types.id'), index=True, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # --- Relationships ---
    user_type = db.relationship('UserType', back_populates='users')
    admin = db.relationship('Admin', back_populates='user', uselist=False, cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("sex IN ('m', 'f')", name='ck_users_sex'),
    )

    @property
    def is_admin(self):
        """An Admin profile marks the user as administrative."""
        return self.admin is not None and not self.is_deleted

    @property
    def full_name(self):
        if self.middle_initial:
            return f'{self.first_name} {self.middle_initial}. {self.last_name}'
        return f'{self.first_name} {self.last_name}'

    def to_dict(self):
        """Convert user to a dictionary for listings (never includes the password)."""
        return {
            'id': self.id,
            'library_id': self.library_id,
            'first_name': self.first_name,
            'middle_initial': self.middle_initial,
            'last_name': self.last_name,
            'sex': self.sex,
            'contact_number': self.contact_number,
            'email': self.email,
            'user_type_id': self.user_type_id,
            'user_type': self.user_type.to_dict() if self.user_type else None,
            'admin': self.admin.to_dict() if self.admin else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.library_id}>'
