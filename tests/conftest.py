from __future__ import annotations

import pytest

from tgfake import setup_logging
from tgfake.fakes import CallAssertions, CallRecorder, FakeBot
from tgfake.payloads import FakeDataProvider, TelegramUpdate


def pytest_configure(config: pytest.Config) -> None:
    setup_logging()


@pytest.fixture
def recorder() -> CallRecorder:
    return CallRecorder()


@pytest.fixture
def calls(recorder: CallRecorder) -> CallAssertions:
    return CallAssertions(recorder)


@pytest.fixture
def fake_bot() -> FakeBot:
    return FakeBot()


@pytest.fixture
def updates() -> TelegramUpdate:
    return TelegramUpdate.create()


@pytest.fixture
def provider_factory():
    def _make(seed: int | None = None) -> FakeDataProvider:
        return FakeDataProvider(seed)

    return _make
