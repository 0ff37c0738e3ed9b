"""
Tests for error handling: error pages, JSON error bodies and handler registration.
"""

import os

from sqlalchemy.exc import OperationalError

import library_admin
from conftest import JSON_HEADERS


def test_error_template_exists():
    """The shared error page template ships with the package."""
    templates_dir = os.path.join(os.path.dirname(library_admin.__file__), 'templates', 'errors')
    assert os.path.exists(os.path.join(templates_dir, 'error.html'))


def test_error_handlers_registered(app):
    """Every HTTP status the admin pages can produce has a handler."""
    print("\n" + "=" * 80)
    print("TEST: Error Handlers Registration")
    print("=" * 80)

    for code in [400, 401, 403, 404, 405, 429, 500, 503]:
        registered = code in app.error_handler_spec[None]
        print(f"  - Handler for {code}: {'REGISTERED' if registered else 'NOT REGISTERED'}")
        assert registered


def test_404_html(client):
    response = client.get('/this-page-does-not-exist-12345')

    assert response.status_code == 404
    assert b'Page Not Found' in response.data


def test_404_json(client):
    response = client.get('/this-page-does-not-exist-12345', headers=JSON_HEADERS)

    assert response.status_code == 404
    body = response.get_json()
    assert body['error']['code'] == 404
    assert body['error']['title'] == 'Page Not Found'


def test_405_on_wrong_method(client):
    assert client.put('/admins/create').status_code == 405


def test_unauthenticated_json_request(app):
    response = app.test_client().get('/admins/', headers={'X-Requested-With': 'XMLHttpRequest'})

    assert response.status_code == 401
    assert response.get_json()['error'] == 'unauthorized'


def test_database_error_escaping_a_view(app):
    @app.route('/boom')
    def boom():
        raise OperationalError('SELECT 1', {}, Exception('connection lost'))

    response = app.test_client().get('/boom', headers=JSON_HEADERS)

    assert response.status_code == 500
    assert response.get_json()['error']['title'] == 'Database Error'


def test_unexpected_exception(app):
    @app.route('/kaboom')
    def kaboom():
        raise RuntimeError('secret internals')

    response = app.test_client().get('/kaboom')

    assert response.status_code == 500
    assert b'Internal Server Error' in response.data
    assert b'secret internals' not in response.data
