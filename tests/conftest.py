from datetime import date

import pytest
from fastapi.testclient import TestClient

from app.ai.base_provider import AIProvider
from app.api import deps
from app.auth.service import AuthService, SessionRegistry
from app.config import settings
from app.core.errors import InsightServiceError, StoreUnavailableError
from app.core.roster import load_roster
from app.main import app
from app.models.sales_models import KPITargets, Periodicity, Sale, SalesStatus, User
from app.services.record_store import InMemoryRecordStore

ROSTER_ENTRIES = [
    {"name": "BRUNA MONTEIRO", "email": "bruna@sharks.com.br", "id": "user_bruna"},
    {"name": "LUCAS", "email": "lucas@sharks.com", "id": "user_lucas"},
    {"name": "DAVI", "email": "davi@sharks.com", "id": "user_davi"},
]


class FakeProvider(AIProvider):
    name = "fake"

    def __init__(self, reply="Para bater a meta, você precisa de 3 vendas.", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def is_available(self) -> bool:
        return True

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FailingProvider(FakeProvider):
    def __init__(self):
        super().__init__(error=InsightServiceError("503 Service Unavailable", "fake"))


class UnreadableStore(InMemoryRecordStore):
    """Store whose reads fail for keys under ``prefix``; writes still land."""

    def __init__(self, prefix="sales:", initial=None):
        super().__init__(initial)
        self.prefix = prefix

    def get(self, key):
        if key.startswith(self.prefix):
            raise StoreUnavailableError(key, "connection reset")
        return super().get(key)


@pytest.fixture
def roster():
    return load_roster(ROSTER_ENTRIES)


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def auth_service(store, roster):
    return AuthService(store, roster)


@pytest.fixture
def seller():
    return User(id="user_lucas", email="lucas@sharks.com", name="LUCAS")


@pytest.fixture
def admin():
    return User(
        id=settings.admin_user_id,
        email=settings.admin_email,
        name=settings.admin_name,
        is_admin=True,
    )


@pytest.fixture
def targets():
    return KPITargets(mrr=7200, revenue=44200, conversion_rate=0.65, deals_closed=34)


@pytest.fixture
def make_sale():
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "id": f"sale_{counter['n']}",
            "customer_id": f"C{counter['n']:03d}",
            "customer_name": f"Cliente {counter['n']}",
            "date": date(2025, 11, 28),
            "revenue": 1000.0,
            "mrr": 1000.0,
            "plan": "Essencial",
            "periodicity": Periodicity.MONTHLY,
            "payment_method": "Cartão",
            "status": SalesStatus.SOLD,
        }
        data.update(overrides)
        return Sale(**data)

    return _make


@pytest.fixture
def client(store, roster, monkeypatch):
    monkeypatch.setattr(settings, "seed_placeholder_data", False)
    registry = SessionRegistry()
    app.dependency_overrides[deps.get_store] = lambda: store
    app.dependency_overrides[deps.get_roster] = lambda: roster
    app.dependency_overrides[deps.get_sessions] = lambda: registry
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    def _login(email, password="12345678"):
        resp = client.post("/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.text
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _login
