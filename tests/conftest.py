import pytest
from channels.layers import channel_layers
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

User = get_user_model()


def make_user(username, **extra):
    extra.setdefault('email', f"{username}@example.com")
    return User.objects.create_user(username=username, password='pass1234!', **extra)


@pytest.fixture(autouse=True)
def fresh_channel_layer():
    # In-memory layers keep queues bound to the event loop that first used them
    channel_layers.backends.clear()
    yield
    channel_layers.backends.clear()


@pytest.fixture
def alice(db):
    return make_user('alice', full_name='Alice Kim')


@pytest.fixture
def bob(db):
    return make_user('bob', full_name='Bob Lee')


@pytest.fixture
def carol(db):
    return make_user('carol', full_name='Carol Park')


@pytest.fixture
def provider(db):
    return make_user('builder', full_name='Han Builder', provider_status=User.PROVIDER_APPROVED)


@pytest.fixture
def manager(db):
    return make_user('manager', is_manager=True)


@pytest.fixture
def user_factory(db):
    return make_user


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client
