import threading
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request

from database import TaskDatabase


# Application context shared by every request handler.
# The single lock serializes all access to the database, including the
# file rewrite that follows a write.
class AppState:
    def __init__(self, db: TaskDatabase):
        self.db = db
        self._lock = threading.Lock()

    # Hold the lock for the duration of the block and hand out the database
    @contextmanager
    def locked(self) -> Iterator[TaskDatabase]:
        with self._lock:
            yield self.db


# Dependency function returning the application context of the running app
def get_app_state(request: Request) -> AppState:
    return request.app.state.app_state
