"""User classification model."""

from datetime import datetime
from library_admin.extensions import db


class UserType(db.Model):
    """A named category a user belongs to (staff_admin, student, ...)."""
    __tablename__ = 'user_types'

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(50), unique=True, index=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    users = db.relationship('User', back_populates='user_type', lazy='dynamic')

    @classmethod
    def find_by_key(cls, key):
        return db.session.scalar(db.select(cls).where(cls.key == key))

    def to_dict(self):
        return {'id': self.id, 'key': self.key, 'name': self.name}

    def __repr__(self):
        return f'<UserType {self.key}>'
