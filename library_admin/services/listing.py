"""
Admin listing query builder.

Turns request parameters into a filtered, sorted and paginated select over
users, joined with their user type and admin profile.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import joinedload

from library_admin.extensions import db
from library_admin.models import Admin, User, UserType

logger = logging.getLogger(__name__)


class _DefaultUserType:
    """Marker for 'no user_type_id parameter was sent'."""

    def __repr__(self):
        return 'DEFAULT_USER_TYPE'


DEFAULT_USER_TYPE = _DefaultUserType()

SORT_DIRECTIONS = ('asc', 'desc')

# Only these request values may reach ORDER BY
SORTABLE_FIELDS = {
    'library_id': User.library_id,
    'first_name': User.first_name,
    'middle_initial': User.middle_initial,
    'last_name': User.last_name,
    'sex': User.sex,
    'email': User.email,
    'contact_number': User.contact_number,
    'user_type_id': User.user_type_id,
    'created_at': User.created_at,
    'role_title': Admin.role_title,
}

LISTING_QUERY_KEYS = ('per_page', 'sort_field', 'sort_direction', 'user_type_id', 'search', 'page')

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def _to_int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _is_empty(value):
    return value is None or value == '' or (isinstance(value, (list, tuple)) and len(value) == 0)


def coerce_id(value):
    """Coerce a single filter value to an integer; non-numeric text becomes 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def normalize_id_list(values):
    """Drop empty, zero and non-numeric entries and coerce the rest to integers."""
    ids = []
    for value in values:
        text = str(value).strip() if value is not None else ''
        if not text.isdigit():
            continue
        number = int(text)
        if number:
            ids.append(number)
    return ids


def escape_like(term):
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


@dataclass
class ListingParams:
    """
    Parameters of the admin listing.

    Defaults: 10 rows per page, first page, no sort field (id order),
    ascending direction, the staff_admin user type, no search.
    """
    per_page: int = 10
    page: int = 1
    sort_field: Optional[str] = None
    sort_direction: str = 'asc'
    user_type_id: Any = DEFAULT_USER_TYPE
    search: Optional[str] = None

    @classmethod
    def from_args(cls, args, default_per_page=10, max_per_page=100):
        """
        Build parameters from a request MultiDict.

        `user_type_id` may be sent once (single value), repeated, or as
        `user_type_id[]`; the latter two are treated as a list. Sending the
        key with an empty value disables the user-type filter.
        """
        per_page = _to_int(args.get('per_page'), default_per_page)
        per_page = max(1, min(per_page, max_per_page))
        page = max(1, _to_int(args.get('page'), 1))

        sort_field = (args.get('sort_field') or '').strip() or None
        sort_direction = (args.get('sort_direction') or 'asc').strip().lower()
        if sort_direction not in SORT_DIRECTIONS:
            sort_direction = 'asc'

        if 'user_type_id[]' in args:
            user_type_id = args.getlist('user_type_id[]')
        elif 'user_type_id' in args:
            values = args.getlist('user_type_id')
            user_type_id = values if len(values) > 1 else (values[0].strip() or None)
        else:
            user_type_id = DEFAULT_USER_TYPE

        search = (args.get('search') or '').strip() or None

        return cls(
            per_page=per_page,
            page=page,
            sort_field=sort_field,
            sort_direction=sort_direction,
            user_type_id=user_type_id,
            search=search,
        )


@dataclass
class AdminListing:
    pagination: Any
    filters: List[dict]
    user_types: List[dict]
    sort_field: Optional[str]
    sort_direction: str
    items: List[User] = field(default_factory=list)

    def page_dict(self):
        p = self.pagination
        return {
            'data': [user.to_dict() for user in self.items],
            'total': p.total,
            'per_page': p.per_page,
            'current_page': p.page,
            'last_page': max(p.pages, 1),
            'from': p.first or None,
            'to': p.last or None,
        }

    def to_props(self):
        return {
            'data': self.page_dict(),
            'filter': self.filters,
            'userTypes': self.user_types,
            'currentSortField': self.sort_field,
            'currentSortDirection': self.sort_direction,
        }


def user_type_condition(value):
    """Where-clause for a user-type filter value, or None when nothing applies."""
    if _is_empty(value):
        return None

    if isinstance(value, (list, tuple)):
        ids = normalize_id_list(value)
        if not ids:
            return None
        return User.user_type_id.in_(ids)

    return User.user_type_id == coerce_id(value)


def search_condition(term):
    like = f'%{escape_like(term)}%'
    return or_(
        User.first_name.ilike(like, escape='\\'),
        User.last_name.ilike(like, escape='\\'),
        cast(User.library_id, String).ilike(like, escape='\\'),
    )


def build_admin_query(params, default_user_type_id=None):
    """
    Build the listing select.

    Returns (stmt, filters, sort_field) where filters are the {id, value}
    descriptors of the active filters and sort_field is the applied sort
    field (None if absent or not allowed).
    """
    filters = []

    user_type_id = params.user_type_id
    if user_type_id is DEFAULT_USER_TYPE:
        user_type_id = default_user_type_id

    stmt = db.select(User).where(User.is_deleted == False).options(  # noqa: E712
        joinedload(User.user_type),
        joinedload(User.admin),
    )

    if not _is_empty(user_type_id):
        filters.append({'id': 'user_type_id', 'value': user_type_id})
        condition = user_type_condition(user_type_id)
        if condition is not None:
            stmt = stmt.where(condition)

    if params.search:
        filters.append({'id': 'search', 'value': params.search})
        stmt = stmt.where(search_condition(params.search))

    sort_field = params.sort_field
    if sort_field and sort_field not in SORTABLE_FIELDS:
        logger.debug(f"Ignoring unsupported sort field: {sort_field!r}")
        sort_field = None

    if sort_field:
        column = SORTABLE_FIELDS[sort_field]
        if sort_field == 'role_title':
            stmt = stmt.outerjoin(Admin, Admin.user_id == User.id)
        stmt = stmt.order_by(column.desc() if params.sort_direction == 'desc' else column.asc())

    # Tiebreaker keeps page boundaries deterministic
    stmt = stmt.order_by(User.id.asc())

    return stmt, filters, sort_field


def list_user_types():
    """All user types ordered by name, for filter choices."""
    user_types = db.session.scalars(db.select(UserType).order_by(UserType.name)).all()
    return [{'id': ut.id, 'name': ut.name} for ut in user_types]


def list_admins(params, staff_admin_key='staff_admin', max_per_page=100):
    """Run the listing for the given parameters and return an AdminListing."""
    default_type = UserType.find_by_key(staff_admin_key)
    default_user_type_id = default_type.id if default_type else None

    stmt, filters, sort_field = build_admin_query(params, default_user_type_id)

    pagination = db.paginate(
        stmt,
        page=params.page,
        per_page=params.per_page,
        max_per_page=max_per_page,
        error_out=False
    )

    return AdminListing(
        pagination=pagination,
        filters=filters,
        user_types=list_user_types(),
        sort_field=sort_field,
        sort_direction=params.sort_direction,
        items=list(pagination.items),
    )
