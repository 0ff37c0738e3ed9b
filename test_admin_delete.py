"""
Tests for soft-deleting admins and returning to the listing.
"""

from urllib.parse import parse_qs, urlsplit

import pytest
from sqlalchemy.exc import OperationalError

from conftest import JSON_HEADERS, count_users, flashed_messages, login_as
from library_admin.models import User


@pytest.fixture
def registrar(make_user):
    return make_user('Grace', 'Hopper', role_title='Registrar', library_id=2001)


def reload(db, user_id):
    db.session.expire_all()
    return db.session.get(User, user_id)


def redirect_query(response):
    location = urlsplit(response.headers['Location'])
    return location.path, parse_qs(location.query)


class TestDelete:
    def test_soft_deletes_user(self, client, db, registrar):
        user_id = registrar.id
        response = client.post(f'/admins/{user_id}')

        assert response.status_code == 303
        assert ('success', 'Admin deleted successfully') in flashed_messages(client)

        user = reload(db, user_id)
        assert user.is_deleted
        assert user.deleted_at is not None
        assert not user.is_admin

    def test_removed_from_listing(self, client, registrar):
        client.post(f'/admins/{registrar.id}')

        props = client.get('/admins/', headers=JSON_HEADERS).get_json()['props']
        assert 2001 not in [row['library_id'] for row in props['data']['data']]

    def test_delete_method(self, client, db, registrar):
        user_id = registrar.id
        response = client.delete(f'/admins/{user_id}')

        assert response.status_code == 303
        assert reload(db, user_id).is_deleted

    def test_delete_path(self, client, db, registrar):
        user_id = registrar.id
        assert client.post(f'/admins/{user_id}/delete').status_code == 303
        assert reload(db, user_id).is_deleted

    def test_preserves_listing_parameters(self, client, make_user, registrar):
        student = make_user('Sam', 'Smith', type_key='student', library_id=3001)
        response = client.post(
            f'/admins/{registrar.id}',
            data={
                'per_page': '25',
                'sort_field': 'last_name',
                'sort_direction': 'desc',
                'user_type_id[]': [str(student.user_type_id), '1'],
                'search': 'hop',
                'page': '2',
            }
        )

        path, query = redirect_query(response)
        assert path == '/admins/'
        assert query == {
            'per_page': ['25'],
            'sort_field': ['last_name'],
            'sort_direction': ['desc'],
            'user_type_id[]': [str(student.user_type_id), '1'],
            'search': ['hop'],
            'page': ['2'],
        }

    def test_query_string_parameters_are_preserved(self, client, registrar):
        response = client.post(f'/admins/{registrar.id}?user_type_id=&search=hop')

        path, query = redirect_query(response)
        assert path == '/admins/'
        assert query == {'search': ['hop']}
        assert 'user_type_id=' in response.headers['Location']

    def test_audit_entry_is_written(self, app, client, registrar):
        user_id = registrar.id
        with pytest.MonkeyPatch.context() as mp:
            calls = []
            mp.setattr('library_admin.admins.routes.log_admin_action',
                       lambda *args, **kwargs: calls.append((args, kwargs)))
            client.post(f'/admins/{user_id}')

        assert calls[0][0][1:] == ('delete_admin', user_id)
        assert calls[0][1] == {'library_id': 2001}


class TestDeleteFailures:
    def test_unknown_user(self, client):
        before = count_users(is_deleted=False)
        response = client.post('/admins/999999')

        assert response.status_code == 302
        assert response.headers['Location'].endswith('/admins/')
        assert ('error', 'Admin not found.') in flashed_messages(client)
        assert count_users(is_deleted=False) == before

    def test_already_deleted_user(self, client, make_user):
        gone = make_user('Gone', 'Away', role_title='Archivist', deleted=True)

        client.post(f'/admins/{gone.id}')

        assert ('error', 'Admin not found.') in flashed_messages(client)

    def test_redirects_back_to_referring_listing(self, client):
        response = client.post('/admins/999999', headers={'Referer': 'http://localhost/admins/?page=3'})

        assert response.headers['Location'].endswith('/admins/?page=3')

    def test_foreign_referrer_is_ignored(self, client):
        response = client.post('/admins/999999', headers={'Referer': 'https://elsewhere.org/phish'})

        assert response.headers['Location'].endswith('/admins/')

    def test_store_error(self, client, db, registrar, monkeypatch):
        user_id = registrar.id

        def failing_commit():
            raise OperationalError('UPDATE users', {}, Exception('database is locked'))

        monkeypatch.setattr(db.session, 'commit', failing_commit)
        client.post(f'/admins/{user_id}')
        monkeypatch.undo()

        assert ('error', 'An error occurred while deleting the admin.') in flashed_messages(client)
        assert not reload(db, user_id).is_deleted

    def test_not_found_is_logged_as_warning(self, client, caplog):
        client.post('/admins/424242')

        records = [r for r in caplog.records if 'Error deleting admin' in r.getMessage()]
        assert records
        assert records[0].levelname == 'WARNING'
        assert 'user_id=424242' in records[0].getMessage()

    def test_requires_admin(self, app, make_user, registrar):
        student = make_user('Sam', 'Smith', type_key='student')
        client = app.test_client()
        login_as(client, student)

        assert client.post(f'/admins/{registrar.id}').status_code == 403
        assert app.test_client().post(f'/admins/{registrar.id}').status_code == 401
