"""Database mixins for common model functionality."""

from datetime import datetime
from sqlalchemy import Column, Boolean, DateTime
from sqlalchemy.orm import declared_attr


class SoftDeleteMixin:
    @declared_attr
    def is_deleted(cls):
        return Column(Boolean, default=False, nullable=False, index=True)

    @declared_attr
    def deleted_at(cls):
        return Column(DateTime, nullable=True, index=True)

    def soft_delete(self):
        self.is_deleted = True
        self.deleted_at = datetime.utcnow()
        return self

    def restore(self):
        self.is_deleted = False
        self.deleted_at = None
        return self

    @property
    def is_active(self):
        return not self.is_deleted

    @classmethod
    def active(cls):
        """Select statement for rows that are not soft-deleted."""
        from library_admin.extensions import db
        return db.select(cls).where(cls.is_deleted == False)  # noqa: E712

    def __repr__(self):
        base_repr = super().__repr__()
        if self.is_deleted:
            return base_repr.replace('>', ' [DELETED]>')
        return base_repr
