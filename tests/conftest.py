import pytest
from fastapi.testclient import TestClient

from portfolio.main import create_app
from portfolio.settings.config import Settings

ADMIN_USERNAME = "awsam"
ADMIN_PASSWORD = "1601"
TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)
PDF_BYTES = b"%PDF-1.4\n1 0 obj<<>>endobj\ntrailer<<>>\n%%EOF\n"


def make_settings(**overrides) -> Settings:
    values = dict(
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        SECRET=TEST_SECRET,
        ADMIN_USERNAME=ADMIN_USERNAME,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def make_client():
    """Build a client around custom settings; each gets a fresh in-memory database."""
    clients = []

    def _make(**overrides):
        client = TestClient(create_app(make_settings(**overrides)))
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def token(client):
    res = client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert res.status_code == 200, res.text
    return res.json()["token"]


@pytest.fixture
def admin_headers(token):
    return {"Authorization": f"Bearer {token}"}
