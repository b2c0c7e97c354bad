from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

# Identifiers are unsigned 64-bit integers supplied by the caller
MAX_ID = 2**64 - 1


# Schema for a single task, used both as the request body and the response.
# Strict: "7" is not an id and 1 is not a boolean.
class Task(BaseModel):
    model_config = ConfigDict(strict=True)

    id: int = Field(ge=0, le=MAX_ID)
    name: str
    completed: bool


# Schema for a stored user. Not exposed by any endpoint.
class User(BaseModel):
    model_config = ConfigDict(strict=True)

    id: int = Field(ge=0, le=MAX_ID)
    username: str
    password: str


# Schema for the whole on-disk snapshot. Both maps must be present.
# Map keys are written as strings in JSON ({"tasks": {"1": {...}}}) and
# parsed back into integers on load.
class Database(BaseModel):
    tasks: Dict[int, Task]
    users: Dict[int, User]
