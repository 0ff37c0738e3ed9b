"""
Shared pytest fixtures: an application on an in-memory database with the
standard user types seeded, and a test client logged in as a staff admin.
"""

import pytest
from flask.testing import FlaskClient
from werkzeug.security import generate_password_hash

from config import TestingConfig
from library_admin import create_app
from library_admin.cli import seed_user_types
from library_admin.extensions import db as _db
from library_admin.models import Admin, User, UserType

JSON_HEADERS = {'Accept': 'application/json'}


class RequestContextClient(FlaskClient):
    """
    Test client that runs every request in its own app context, as a server
    would, instead of reusing the context the test body holds. Keeps `g`
    (and the user Flask-Login caches there) and the db session per request.
    """

    def open(self, *args, **kwargs):
        with self.application.app_context():
            return super().open(*args, **kwargs)


@pytest.fixture
def app(request, tmp_path):
    """
    Application with seeded user types. Config overrides come from an
    `app_settings` marker, e.g. @pytest.mark.app_settings(RATELIMIT_ENABLED=True).
    """
    marker = request.node.get_closest_marker('app_settings')
    settings = dict(marker.kwargs) if marker else {}
    settings['LOG_DIR'] = str(tmp_path / 'logs')

    app = create_app(type('Config', (TestingConfig,), settings))
    app.test_client_class = RequestContextClient

    with app.app_context():
        _db.create_all()
        seed_user_types()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_user(app):
    """Factory creating committed users; pass role_title to attach an admin profile."""
    counter = {'n': 0}

    def _make_user(first_name='Test', last_name='User', type_key='staff_admin',
                   role_title=None, library_id=None, email=None, deleted=False, sex='f', **extra):
        counter['n'] += 1
        user_type = UserType.find_by_key(type_key)
        user = User(
            library_id=library_id or 5000000000 + counter['n'],
            first_name=first_name,
            last_name=last_name,
            sex=sex,
            email=email or f'user{counter["n"]}@library.org',
            password=generate_password_hash('Str0ng!Passw0rd'),
            user_type_id=user_type.id,
            **extra
        )
        if role_title:
            user.admin = Admin(role_title=role_title)
        if deleted:
            user.soft_delete()
        _db.session.add(user)
        _db.session.commit()
        return user

    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user('Ada', 'Lovelace', role_title='Head Librarian',
                     library_id=1, email='ada@library.org')


def login_as(client, user):
    with client.session_transaction() as sess:
        sess['_user_id'] = str(user.id)
        sess['_fresh'] = True


@pytest.fixture
def client(app, admin_user):
    client = app.test_client()
    login_as(client, admin_user)
    return client


def flashed_messages(client):
    """Flashed (category, message) pairs still pending in the client's session."""
    with client.session_transaction() as sess:
        return [tuple(item) for item in sess.get('_flashes', [])]


def count_users(**filters):
    stmt = _db.select(_db.func.count(User.id))
    for name, value in filters.items():
        stmt = stmt.where(getattr(User, name) == value)
    return _db.session.scalar(stmt)


def count_admins():
    return _db.session.scalar(_db.select(_db.func.count(Admin.id)))
