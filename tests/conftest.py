from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from database import TaskDatabase
from main import create_app
from state import AppState


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "database.json"


@pytest.fixture()
def db(db_path: Path) -> TaskDatabase:
    return TaskDatabase(path=db_path)


@pytest.fixture()
def app_state(db: TaskDatabase) -> AppState:
    return AppState(db)


@pytest.fixture()
def client(app_state: AppState) -> TestClient:
    return TestClient(create_app(app_state))
