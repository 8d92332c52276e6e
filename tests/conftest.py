import httpx
import pytest
import pytest_asyncio

from jobboard_client.domain.services.auth.account import AccountService
from jobboard_client.domain.services.auth.session_manager import SessionManager
from jobboard_client.infrastructure.http.transport import HttpTransport
from jobboard_client.infrastructure.storage.memory import InMemorySessionStore
from tests.support.doubles import RecordingLoginRedirect
from tests.support.fake_backend import BASE_URL, FakeBackend

SEEKER_EMAIL = "john@example.com"
SEEKER_PASSWORD = "Seeker123!"


@pytest.fixture
def backend():
    """Fake backend with one registered job seeker."""
    fake = FakeBackend()
    fake.add_user(SEEKER_EMAIL, SEEKER_PASSWORD)
    return fake


@pytest_asyncio.fixture
async def http_client(backend):
    transport = httpx.ASGITransport(app=backend.app)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client


@pytest.fixture
def store():
    return InMemorySessionStore()


@pytest.fixture
def login_redirect():
    return RecordingLoginRedirect()


@pytest.fixture
def session_manager(store, http_client, login_redirect):
    """SessionManager talking to the fake backend through ASGI."""
    return SessionManager(store, HttpTransport(client=http_client), login_redirect)


@pytest.fixture
def account_service(session_manager):
    return AccountService(session_manager)


@pytest_asyncio.fixture
async def logged_in(backend, store):
    """Stores a valid session for the seeker, as a previous login would have."""
    pair = backend.issue_pair(SEEKER_EMAIL)
    await store.set(pair)
    return pair
