"""
Tests that rate limiting applies only to the create and delete actions.
"""

import pytest

from conftest import JSON_HEADERS
from library_admin.extensions import limiter

pytestmark = pytest.mark.app_settings(RATELIMIT_ENABLED=True)


def test_listing_is_never_throttled(client):
    """Paging through the listing many times from one address keeps working."""
    codes = [client.get(f'/admins/?page={i}').status_code for i in range(1, 61)]

    assert 429 not in codes
    assert set(codes) == {200}


def test_create_form_is_never_throttled(client):
    codes = [client.get('/admins/create').status_code for _ in range(60)]

    assert 429 not in codes


def test_admin_actions_are_throttled(app, client):
    app.config['RATELIMIT_ADMIN_ACTION'] = '2 per hour'
    limiter.reset()

    codes = [
        client.post('/admins/', data={'library_id': 'x'}, headers=JSON_HEADERS).status_code
        for _ in range(3)
    ]

    assert codes == [422, 422, 429]
    assert client.get('/admins/').status_code == 200
