from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.logging_config import setup_logging
from app.reminders.router import router as reminders_router
from app.supergoal.exceptions import SuperGoalError
from app.supergoal.router import router as supergoal_router


@asynccontextmanager
async def lifespan(_app: FastAPI):
    setup_logging()
    yield


app = FastAPI(title="Questlog Super Goals", version="0.1.0", lifespan=lifespan)
app.include_router(supergoal_router)
app.include_router(reminders_router)


@app.exception_handler(SuperGoalError)
async def super_goal_error_handler(_request: Request, exc: SuperGoalError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status_code,
        content={"error": {"code": exc.error_code, "message": exc.message}},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
    )


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "supergoals": {
            "detail": "/supergoals/{id}",
            "preview": "/supergoals/{id}/preview",
            "save": "/supergoals/{id}",
            "snapshot": "/supergoals/{id}/snapshot",
            "promote": "/supergoals/{id}/promote",
        },
        "reminders": {"process": "/reminders/{user_id}/process"},
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
