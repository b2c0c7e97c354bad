import logging
from contextlib import asynccontextmanager
from typing import Annotated, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Path, Response, status
from fastapi.middleware.cors import CORSMiddleware

# Import the Pydantic schemas, the database and the shared application state
from database import DATABASE_PATH, TaskDatabase
from logging_setup import setup_logging
from schemas import MAX_ID, Task
from state import AppState, get_app_state

logger = logging.getLogger(__name__)

# --- Server Configuration ---
HOST = "127.0.0.1"
PORT = 8000

# --- CORS Configuration ---
# Any origin starting with http://localhost, plus the opaque "null" origin
CORS_ORIGIN_REGEX = r"http://localhost.*|null"
CORS_METHODS = ["GET", "POST", "PUT", "DELETE"]
CORS_HEADERS = ["Authorization", "Accept", "Content-Type"]
CORS_MAX_AGE = 36000

router = APIRouter()


# --- API Endpoints ---

# Endpoint to create or overwrite a task.
# The response is 200 once the task is in memory, even if saving to disk fails.
@router.post("/task")
def create_task(task: Task, app_state: Annotated[AppState, Depends(get_app_state)]):
    with app_state.locked() as db:
        db.insert(task)
        logger.debug("Stored task id=%d", task.id)
        try:
            db.save_to_file()
        except OSError:
            logger.exception("Failed to save database to %s", db.path)
    return Response(status_code=status.HTTP_200_OK)


# Endpoint to read a single task by id
@router.get("/task/{task_id}", response_model=Task)
def read_task(
    task_id: Annotated[int, Path(ge=0, le=MAX_ID)],
    app_state: Annotated[AppState, Depends(get_app_state)],
):
    with app_state.locked() as db:
        task = db.get(task_id)
    if task is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return task


# Load the database from DATABASE_PATH on startup unless a state was given
@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "app_state", None) is None:
        app.state.app_state = AppState(TaskDatabase.load_or_create(DATABASE_PATH))
    yield


# Build the FastAPI application, optionally around an existing state
def create_app(app_state: Optional[AppState] = None) -> FastAPI:
    app = FastAPI(title="Task Store", lifespan=lifespan)

    # Configure CORS (Cross-Origin Resource Sharing) for local frontends
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=CORS_ORIGIN_REGEX,
        allow_credentials=True,  # Allows cookies to be included in cross-origin requests
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        max_age=CORS_MAX_AGE,
    )

    app.state.app_state = app_state
    app.include_router(router)
    return app


# Application instance for `uvicorn main:app`; nothing is read until startup
app = create_app()


if __name__ == "__main__":
    setup_logging()
    uvicorn.run(app, host=HOST, port=PORT)
