"""Admin profile model."""

from datetime import datetime
from library_admin.extensions import db


class Admin(db.Model):
    """One-to-one administrative profile of a User."""
    __tablename__ = 'admins'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), unique=True, nullable=False)
    role_title = db.Column(db.String(100), nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = db.relationship('User', back_populates='admin')

    def to_dict(self):
        return {'id': self.id, 'user_id': self.user_id, 'role_title': self.role_title}

    def __repr__(self):
        return f'<Admin {self.user_id}: {self.role_title}>'
