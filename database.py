import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from schemas import Database, Task, User

logger = logging.getLogger(__name__)

# This file acts as a small in-memory database that is flushed to a single
# JSON file after every write. The whole snapshot is rewritten each time,
# so it is only meant for tiny datasets.

# Default location of the snapshot, relative to the working directory
DATABASE_PATH = Path("database.json")


class TaskDatabase:
    def __init__(self, data: Optional[Database] = None, path: Union[str, Path] = DATABASE_PATH):
        self.data = data if data is not None else Database(tasks={}, users={})
        self.path = Path(path)

    # --- Task CRUD ---

    # Insert a task, overwriting any task with the same id
    def insert(self, task: Task) -> None:
        self.data.tasks[task.id] = task

    def get(self, task_id: int) -> Optional[Task]:
        return self.data.tasks.get(task_id)

    # Iteration order of the underlying dict; callers must not rely on it
    def get_all(self) -> List[Task]:
        return list(self.data.tasks.values())

    # Removing a missing id is a no-op
    def delete(self, task_id: int) -> None:
        self.data.tasks.pop(task_id, None)

    # Same overwrite-by-id semantics as insert; the task need not exist yet
    def update(self, task: Task) -> None:
        self.data.tasks[task.id] = task

    # --- User data ---

    def insert_user(self, user: User) -> None:
        self.data.users[user.id] = user

    # Linear scan over every stored user
    def get_user_by_name(self, username: str) -> Optional[User]:
        return next((u for u in self.data.users.values() if u.username == username), None)

    # --- Persistence ---

    # Truncate and rewrite the snapshot file. Raises OSError on failure.
    def save_to_file(self) -> None:
        payload = self.data.model_dump_json()
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(payload)

    # Read and parse the snapshot file.
    # Raises OSError if it cannot be read and ValidationError if it is malformed.
    @classmethod
    def load_from_file(cls, path: Union[str, Path] = DATABASE_PATH) -> "TaskDatabase":
        path = Path(path)
        content = path.read_text(encoding="utf-8")
        data = Database.model_validate_json(content)
        return cls(data, path)

    # Load the snapshot at startup, falling back to an empty database
    @classmethod
    def load_or_create(cls, path: Union[str, Path] = DATABASE_PATH) -> "TaskDatabase":
        path = Path(path)
        try:
            db = cls.load_from_file(path)
        except FileNotFoundError:
            logger.info("No database file at %s, starting empty", path)
            return cls(path=path)
        except (OSError, ValidationError) as e:
            logger.warning("Could not load database file %s, starting empty: %s", path, e)
            return cls(path=path)
        logger.info(
            "Loaded database from %s tasks=%d users=%d",
            path,
            len(db.data.tasks),
            len(db.data.users),
        )
        return db
