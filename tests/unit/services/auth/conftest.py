import pytest

from jobboard_client.domain.services.auth.session_manager import SessionManager
from jobboard_client.domain.value_objects.token_pair import TokenPair
from jobboard_client.infrastructure.storage.memory import InMemorySessionStore
from tests.support.doubles import RecordingLoginRedirect, ScriptedTransport, error, ok

INITIAL_TOKENS = TokenPair(access="a1", refresh="r1")
REFRESHED_TOKENS = TokenPair(access="a2", refresh="r2")


class ScriptedBackend:
    """Answers protected calls only for `valid_access`; refresh rotates to a2/r2."""

    def __init__(self):
        self.valid_access = {INITIAL_TOKENS.access}
        self.refresh_response = None
        self.refresh_hook = None
        self.resource_hook = None

    async def __call__(self, request):
        if request.path == "/auth/refresh":
            if self.refresh_hook is not None:
                await self.refresh_hook(request)
            if self.refresh_response is not None:
                return self.refresh_response
            self.valid_access = {REFRESHED_TOKENS.access}
            return ok({"accessToken": REFRESHED_TOKENS.access, "refreshToken": REFRESHED_TOKENS.refresh})
        if self.resource_hook is not None:
            await self.resource_hook(request)
        if request.bearer_token not in self.valid_access:
            return error(401, "Token expired")
        return ok({"path": request.path, "token": request.bearer_token})


@pytest.fixture
def scripted_backend():
    return ScriptedBackend()


@pytest.fixture
def transport(scripted_backend):
    return ScriptedTransport(scripted_backend)


@pytest.fixture
def store():
    return InMemorySessionStore(INITIAL_TOKENS)


@pytest.fixture
def login_redirect():
    return RecordingLoginRedirect()


@pytest.fixture
def manager(store, transport, login_redirect):
    return SessionManager(store, transport, login_redirect)
