from urllib.parse import urlencode

import pytest
from cryptography.fernet import Fernet
from satosa.context import Context
from satosa.response import Redirect
from satosa.state import State

from satosa_papi_backend.local_store import LocalStore
from satosa_papi_backend.state_store import StateStore

PAPI_SERVER = 'https://papi.example.org/GPoA'


class FakeRedis(object):
    def __init__(self):
        self.data = {}
        self.expiry = {}

    def set(self, name, value, ex=None):
        self.data[name] = value
        self.expiry[name] = ex
        return True

    def get(self, name):
        return self.data.get(name)


class FakePoA(object):
    """ Records what the bridge asks of it; redirects unless authenticated is set """
    def __init__(self, site, return_url=None):
        self.site = site
        self.return_url = return_url or 'https://proxy.example.org/papi/papi_response'
        self.authenticated = False
        self.attributes = {}
        self.authenticate_calls = []
        self.logout_calls = []
        self.redirect_params = None

    def is_authenticated(self, context):
        return self.authenticated

    def _redirect(self, hook):
        params = {'URL': self.return_url, 'ACTION': 'CHECK'}
        if hook is not None:
            cancel = hook(params)
            assert cancel is False
        self.redirect_params = params
        return Redirect(PAPI_SERVER + '?' + urlencode(params))

    def authenticate(self, context, hook=None):
        self.authenticate_calls.append(hook)
        if self.authenticated:
            return None
        return self._redirect(hook)

    def logout(self, context, slo=True, hook=None):
        self.logout_calls.append((slo, hook))
        self.authenticated = False
        return self._redirect(hook)

    def get_attributes(self, context):
        return self.attributes


@pytest.fixture
def poa_class():
    return FakePoA


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def encryption_key():
    return Fernet.generate_key().decode()


@pytest.fixture
def local_store(encryption_key, fake_redis):
    return LocalStore(encryption_key, redis_client=fake_redis)


@pytest.fixture
def state_store(local_store):
    return StateStore(local_store)


@pytest.fixture
def context():
    context = Context()
    context.state = State()
    context.request = {}
    return context
