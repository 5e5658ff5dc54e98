from pathlib import Path
from typing import Iterator, List, Tuple

import pytest
from fastapi.testclient import TestClient

from app.core.app_factory import create_application
from app.core.config import Settings
from app.infrastructure.persistence.sqlite import SQLitePersistence
from app.services.activation_gate import ActivationGate
from app.services.resend_issuer import ResendIssuer
from app.services.token_issuer import TokenIssuer
from app.services.verification_processor import VerificationProcessor


class RecordingNotifier:
    """Notifier double that keeps every (recipient, token) it was handed."""

    def __init__(self) -> None:
        self.sent: List[Tuple[str, str]] = []

    def notify(self, recipient: str, token: str) -> None:
        self.sent.append((recipient, token))


@pytest.fixture
def persistence(tmp_path: Path) -> Iterator[SQLitePersistence]:
    store = SQLitePersistence(tmp_path / "app.db")
    yield store
    store.close()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def issuer(persistence: SQLitePersistence, notifier: RecordingNotifier) -> TokenIssuer:
    return TokenIssuer(persistence, notifier)


@pytest.fixture
def processor(persistence: SQLitePersistence) -> VerificationProcessor:
    return VerificationProcessor(persistence)


@pytest.fixture
def gate(persistence: SQLitePersistence) -> ActivationGate:
    return ActivationGate(persistence)


@pytest.fixture
def resender(persistence: SQLitePersistence, issuer: TokenIssuer) -> ResendIssuer:
    return ResendIssuer(persistence, issuer)


@pytest.fixture
def user(persistence: SQLitePersistence):
    return persistence.create_user(name="User One", email="u1@example.com", password_hash="x")


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    monkeypatch.setenv("DATABASE_PATH", str(tmp_path / "api.db"))
    monkeypatch.setenv("ACCESS_TOKEN_SECRET", "test-secret")
    monkeypatch.setenv("LOGIN_URL", "/login")
    for key in ("SMTP_HOST", "SMTP_USERNAME", "SMTP_FROM_EMAIL", "VERIFICATION_TOKEN_TTL_HOURS"):
        monkeypatch.delenv(key, raising=False)
    return Settings()


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    app = create_application(settings)
    with TestClient(app) as test_client:
        yield test_client
