"""
Common test fixtures for the HouseHub API tests.

Provides two users, a listing owned by the second one, Django test
clients authenticated with JWT tokens and a clean realtime relay per
test.
"""
import pytest
from django.contrib.auth.models import User
from django.test import Client

from messaging.relay import get_relay
from properties.models import Property


@pytest.fixture(autouse=True)
def clean_relay():
    relay = get_relay()
    relay.close()
    yield relay
    relay.close()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(username="u1", password="pass12345", email="u1@example.com")


@pytest.fixture
def other_user(db):
    """Create a second user, the owner of `property`."""
    return User.objects.create_user(
        username="u2", password="pass12345", email="u2@example.com",
        first_name="Priya", last_name="Owner",
    )


@pytest.fixture
def property(db, other_user):
    """Create a listing owned by `other_user`."""
    return Property.objects.create(
        owner=other_user,
        title="2BHK near metro",
        property_type=Property.TYPE_APARTMENT,
        listing_type=Property.LISTING_RENT,
        price=18000,
        city="Pune",
        images=["https://cdn.example.com/p/1.jpg", "https://cdn.example.com/p/2.jpg"],
    )


def _login(client, username):
    resp = client.post(
        "/api/auth/token/",
        {"username": username, "password": "pass12345"},
        content_type="application/json",
    )
    assert resp.status_code == 200
    token = resp.json()["access"]
    client.defaults["HTTP_AUTHORIZATION"] = f"Bearer {token}"
    return client


@pytest.fixture
def auth_client(client, db, user):
    """Authenticate the Django test client as `user` using JWT tokens."""
    return _login(client, user.username)


@pytest.fixture
def other_client(db, other_user):
    """A second client authenticated as `other_user`."""
    return _login(Client(), other_user.username)
