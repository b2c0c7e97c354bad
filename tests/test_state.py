import threading

import pytest

from database import TaskDatabase
from schemas import Task
from state import AppState


def test_locked_yields_database(app_state: AppState, db: TaskDatabase) -> None:
    with app_state.locked() as locked_db:
        assert locked_db is db


def test_lock_released_after_error(app_state: AppState) -> None:
    with pytest.raises(RuntimeError):
        with app_state.locked():
            raise RuntimeError("boom")

    # A later caller still gets the database
    with app_state.locked() as db:
        db.insert(Task(id=1, name="after", completed=False))
        assert db.get(1).name == "after"


def test_lock_excludes_other_threads(app_state: AppState) -> None:
    entered = threading.Event()

    def other() -> None:
        with app_state.locked():
            entered.set()

    with app_state.locked():
        t = threading.Thread(target=other)
        t.start()
        assert not entered.wait(0.2)
    t.join(timeout=5)
    assert entered.is_set()
