import smtplib

import httpx
import mongomock
import pytest
from fastapi.testclient import TestClient

from main import create_app
from payments import StripeClient


class FakeMailer:
    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, to, subject, text):
        if self.fail:
            raise smtplib.SMTPException("relay unavailable")
        self.sent.append({"to": to, "subject": subject, "text": text})


class FakeStripe:
    """httpx transport standing in for api.stripe.com."""

    def __init__(self):
        self.requests = []
        self.error = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error:
            return httpx.Response(402, json={"error": {"message": self.error}})
        return httpx.Response(200, json={"id": "pi_123", "client_secret": "pi_123_secret_abc"})


@pytest.fixture
def db():
    return mongomock.MongoClient().ecom


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def stripe():
    return FakeStripe()


@pytest.fixture
def client(db, mailer, stripe):
    payments = StripeClient("sk_test_123", transport=httpx.MockTransport(stripe))
    app = create_app(db=db, mailer=mailer, payments=payments)
    return TestClient(app)


def register(client, email="a@b.com", password="pw1"):
    return client.post("/api/register", json={"email": email, "password": password})


def login(client, email="a@b.com", password="pw1"):
    return client.post("/api/login", json={"email": email, "password": password})


@pytest.fixture
def token(client):
    register(client)
    return login(client).json()["token"]
