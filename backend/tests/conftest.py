# backend/tests/conftest.py
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from backend.aurastudio.clients import (
    get_genai_client,
    get_groq_client,
    get_imagekit_client,
    reset_clients,
)
from backend.aurastudio.logging_config import reset_metrics
from backend.aurastudio.main import app as aura_app

from fakes import chat_completion, imagekit_url, upload_result

TEST_ENV = {
    "GROQ_API_KEY": "test-groq-key",
    "GOOGLE_GEMINI_API_KEY": "test-gemini-key",
    "IMAGEKIT_PUBLIC_KEY": "public_test",
    "IMAGEKIT_PRIVATE_KEY": "private_test",
    "IMAGEKIT_URL_ENDPOINT": "https://ik.imagekit.io/demo",
}


@pytest.fixture(autouse=True)
def provider_env(monkeypatch):
    """Dummy credentials for every test; settings and clients rebuilt from them."""
    for name, value in TEST_ENV.items():
        monkeypatch.setenv(name, value)
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "NEXT_PUBLIC_IMAGEKIT_PUBLIC_KEY", "IMAGEKIT_UPLOAD_FOLDER"):
        monkeypatch.delenv(name, raising=False)
    reset_clients()
    reset_metrics()
    yield
    reset_clients()


@pytest.fixture()
def groq_stub():
    stub = MagicMock(name="groq")
    stub.chat.completions.create.return_value = chat_completion(
        '{"rating": 7, "pollinations_prompt": "a dreamy neon portrait"}'
    )
    return stub


@pytest.fixture()
def genai_stub():
    return MagicMock(name="genai")


@pytest.fixture()
def imagekit_stub():
    stub = MagicMock(name="imagekit")
    stub.upload_file.return_value = upload_result()
    stub.get_authentication_parameters.return_value = {
        "token": "token-abc",
        "expire": 1700000000,
        "signature": "sig-123",
    }
    stub.url.side_effect = imagekit_url
    return stub


@pytest.fixture()
def app(groq_stub, genai_stub, imagekit_stub):
    aura_app.dependency_overrides[get_groq_client] = lambda: groq_stub
    aura_app.dependency_overrides[get_genai_client] = lambda: genai_stub
    aura_app.dependency_overrides[get_imagekit_client] = lambda: imagekit_stub
    yield aura_app
    aura_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    return TestClient(app)
