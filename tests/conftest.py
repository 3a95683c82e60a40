import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from expertax import auth
from expertax.database import create_db_engine
from expertax.domain.documents.file_store import LocalFileStore, get_file_store
from expertax.main import create_app
from expertax.storage import DatabaseStorage, MemoryStorage

# Bearer tokens accepted by the fake identity verifier, keyed to client e-mails
IDENTITY_TOKENS = {
    "token-alice": "alice@example.com",
    "token-bob": "bob@example.com",
}

# Valid signature, but the address was never confirmed
UNVERIFIED_TOKENS = {
    "token-alice-unverified": "alice@example.com",
}


@pytest.fixture(params=["memory", "database"])
def storage(request):
    """Every test using this fixture runs once per storage backend"""
    if request.param == "memory":
        yield MemoryStorage()
        return

    engine = create_db_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db_storage = DatabaseStorage(engine)
    db_storage.create_tables()
    yield db_storage
    engine.dispose()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def app(storage, upload_dir, monkeypatch):
    async def fake_verify(token: str) -> dict:
        if token in UNVERIFIED_TOKENS:
            return {"email": UNVERIFIED_TOKENS[token], "email_verified": False, "sub": token}
        if token not in IDENTITY_TOKENS:
            raise HTTPException(status_code=401, detail="Invalid token")
        return {"email": IDENTITY_TOKENS[token], "email_verified": True, "sub": token}

    monkeypatch.setattr(auth, "verify_identity_token", fake_verify)

    application = create_app(storage=storage)
    application.dependency_overrides[get_file_store] = lambda: LocalFileStore(str(upload_dir))
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(app):
    with TestClient(app) as test_client:
        register_admin(test_client)
        yield test_client


def register_admin(client, username="sandy"):
    response = client.post(
        "/api/register",
        json={
            "username": username,
            "email": f"{username}@provisionexpertax.com",
            "password": "s3cret-pass",
            "firstName": username.title(),
        },
    )
    assert response.status_code == 200, response.text
    return response.json()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def error_fields(response) -> set:
    """Field names referenced by a 400 validation response"""
    return {error["loc"][-1] for error in response.json()["errors"]}
