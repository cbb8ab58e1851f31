# workout_tracker/main.py
import os
import time
import logging
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from workout_tracker.catalog import seed_if_needed
from workout_tracker.db import SessionLocal, init_db  # SessionLocal also backs the healthz DB check
from workout_tracker.deps.workouts import WorkoutRegistry
from workout_tracker.errors import StoreError, WorkoutStateError
from workout_tracker.routers.days import router as days_router
from workout_tracker.routers.workouts import router as workouts_router
from workout_tracker.routers.sessions import router as sessions_router
from workout_tracker.routers.dashboard import router as dashboard_router
from workout_tracker.routers.progress import router as progress_router
from workout_tracker.routers.preferences import router as preferences_router
from workout_tracker.settings import get_settings

log = logging.getLogger("uvicorn")

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if settings.is_sqlite:
        # Postgres schemas are managed by alembic
        init_db()
    if settings.SEED_CATALOG:
        with SessionLocal() as db:
            seed_if_needed(db)
    app.state.workouts = WorkoutRegistry()
    yield
    app.state.workouts.close_all()

app = FastAPI(
    title="Workout Tracker API",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "days", "description": "Workout days and their exercises"},
        {"name": "workouts", "description": "Live workout sessions"},
        {"name": "sessions", "description": "Logged sessions and the unfinished one"},
        {"name": "dashboard", "description": "Rotation, streak and weekly summary"},
        {"name": "progress", "description": "Exercise history and personal bests"},
        {"name": "settings", "description": "Rest timer and weight increment preferences"},
    ],
)


# CORS (relax for local dev; tighten origins in prod via env)
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id_and_log(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Request-ID"] = req_id
    log.info("rid=%s %s %s -> %s in %.1fms",
             req_id, request.method, request.url.path, response.status_code, duration_ms)
    return response

@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    log.warning("store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "storage unavailable, try again"})

@app.exception_handler(WorkoutStateError)
async def workout_state_error_handler(request: Request, exc: WorkoutStateError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})

@app.get("/")
def root():
    return {"ok": True, "name": "Workout Tracker API"}

@app.get("/ping")
def ping():
    return {"pong": True}

@app.get("/healthz")
def healthz():
    # Quick DB sanity check
    try:
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        return {"status": "ok"}
    except Exception as e:
        return {"status": "degraded", "error": str(e)}

@app.get("/version")
def version():
    return {"version": os.getenv("API_VERSION", "dev")}

# Routers
app.include_router(days_router)
app.include_router(workouts_router)
app.include_router(sessions_router)
app.include_router(dashboard_router)
app.include_router(progress_router)
app.include_router(preferences_router)
