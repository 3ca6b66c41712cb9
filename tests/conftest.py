import pytest

from payment_input.core.client import PaymentIntentResult
from payment_input.core.config import RuntimeConfig
from payment_input.core.credentials import InMemoryCredentialStore, encrypt_credentials
from payment_input.core.models import EncryptedCredentials, SessionState, TypebotInQueue, Variable

ENCRYPTION_SECRET = "0123456789abcdef0123456789abcdef"

STRIPE_KEYS = {
    "live": {"secretKey": "sk_live_123", "publicKey": "pk_live_123"},
    "test": {"secretKey": "sk_test_123", "publicKey": "pk_test_123"},
}


class FakeProviderClient:
    def __init__(self, secret_key, api_version, client_secret):
        self.secret_key = secret_key
        self.api_version = api_version
        self.client_secret = client_secret
        self.calls = []

    async def create_payment_intent(self, **kwargs):
        self.calls.append(kwargs)
        return PaymentIntentResult(
            id="pi_123",
            client_secret=self.client_secret,
            status="requires_payment_method",
        )


class FakeProviderFactory:
    """Stands in for the Stripe client factory and records every client built."""

    def __init__(self, client_secret="pi_123_secret_456"):
        self.client_secret = client_secret
        self.clients = []

    def __call__(self, secret_key, api_version):
        client = FakeProviderClient(secret_key, api_version, self.client_secret)
        self.clients.append(client)
        return client

    @property
    def calls(self):
        return [call for client in self.clients for call in client.calls]


@pytest.fixture
def encryption_secret():
    return ENCRYPTION_SECRET


@pytest.fixture
def config():
    return RuntimeConfig(encryption_secret=ENCRYPTION_SECRET)


@pytest.fixture
def stripe_keys():
    return {branch: dict(keys) for branch, keys in STRIPE_KEYS.items()}


@pytest.fixture
def make_record():
    def _make(credentials_id="c1", workspace_id="ws1", keys=None):
        data, iv = encrypt_credentials(keys or STRIPE_KEYS, ENCRYPTION_SECRET)
        return EncryptedCredentials(id=credentials_id, workspace_id=workspace_id, data=data, iv=iv)

    return _make


@pytest.fixture
def credential_store(make_record):
    return InMemoryCredentialStore([make_record()])


@pytest.fixture
def make_state():
    def _make(result_id=None, variables=None, workspace_id="ws1"):
        bound = tuple(
            Variable(id=f"v{index}", name=name, value=value)
            for index, (name, value) in enumerate((variables or {}).items())
        )
        return SessionState(
            workspace_id=workspace_id,
            typebots_queue=(TypebotInQueue(result_id=result_id, variables=bound),),
        )

    return _make


@pytest.fixture
def provider_factory():
    return FakeProviderFactory()
