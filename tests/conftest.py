from typing import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pytest_mock import MockerFixture

from site_api.main import create_app
from site_api.services.contact import ContactHandler
from site_api.settings import Settings
from site_api.utils.email import Mailer
from site_api.utils.turnstile import TurnstileVerifier


ORIGIN = "https://www.example.com"


@pytest.fixture
def config() -> Settings:
    return Settings(
        allowed_origin=ORIGIN,
        turnstile_secret=None,
        smtp_user="site@example.com",
        smtp_pass="secret",
        from_email=None,
        dest_email=None,
        sentry_dsn=None,
    )


@pytest.fixture
def mailer(mocker: MockerFixture) -> Mailer:
    return mocker.AsyncMock(spec=Mailer)


@pytest.fixture
def verifier(mocker: MockerFixture) -> TurnstileVerifier:
    verifier = mocker.AsyncMock(spec=TurnstileVerifier)
    verifier.verify.return_value = True
    return verifier


@pytest.fixture
def handler(config: Settings, mailer: Mailer) -> ContactHandler:
    return ContactHandler(config, mailer)


@pytest.fixture
def app(config: Settings, handler: ContactHandler) -> FastAPI:
    app = create_app(config)
    app.state.contact_handler = handler
    return app


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
