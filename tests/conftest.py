import pytest
from PySide6.QtCore import QCoreApplication

from fakes import FakeClient, FakeSink, ManualDispatcher


@pytest.fixture(scope="session", autouse=True)
def qcore_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def dispatcher() -> ManualDispatcher:
    return ManualDispatcher()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()
