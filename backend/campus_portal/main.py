import logging
import os
import threading

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from campus_portal.routes import (
    admin,
    announcements,
    assignments,
    auth,
    calendar,
    chat,
    feedback,
    materials,
    notifications,
    progress,
    results,
    submissions,
    users,
)
from campus_portal.database.base import Base
from campus_portal.database.session import engine, SessionLocal
from campus_portal import models  # noqa: F401
from campus_portal.core.config import (
    ADMIN_EMAIL,
    ADMIN_NAME,
    ADMIN_PASSWORD,
    ADMIN_USERNAME,
    CORS_ORIGINS,
    CORS_ORIGIN_REGEX,
    LOG_LEVEL,
    STUDENT_EMAIL,
    STUDENT_NAME,
    STUDENT_PASSWORD,
    STUDENT_USERNAME,
    parse_cors_origins,
)
from campus_portal.core.security import get_password_hash
from campus_portal.models.user import User
from campus_portal.services.date_windows import utc_now

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("uvicorn.error")
app = FastAPI(title="Campus Portal")

cors_origins = parse_cors_origins(CORS_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_origin_regex=CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.middleware("http")
async def ensure_utf8_json_charset(request: Request, call_next):
    response = await call_next(request)
    content_type = str(response.headers.get("content-type", ""))
    if content_type.startswith("application/json") and "charset=" not in content_type.lower():
        response.headers["content-type"] = "application/json; charset=utf-8"
    return response


def ensure_default_user(username: str, email: str, password: str, full_name: str, role: str):
    if not username or not email or not password:
        return
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.username == username).first()
        if existing:
            if existing.role != role:
                existing.role = role
                db.commit()
            return
        logger.info("Creating default %s user %s", role, username)
        db.add(
            User(
                username=username,
                email=email,
                password=get_password_hash(password),
                role=role,
                full_name=full_name,
                created_at=utc_now(),
            )
        )
        db.commit()
    finally:
        db.close()


def ensure_admin_user():
    ensure_default_user(ADMIN_USERNAME, ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_NAME, "admin")


def ensure_student_user():
    ensure_default_user(STUDENT_USERNAME, STUDENT_EMAIL, STUDENT_PASSWORD, STUDENT_NAME, "student")


def run_db_bootstrap() -> None:
    steps = [
        ("create_all", lambda: Base.metadata.create_all(bind=engine)),
        ("ensure_admin_user", ensure_admin_user),
        ("ensure_student_user", ensure_student_user),
    ]
    for step_name, step_fn in steps:
        try:
            step_fn()
        except Exception:  # pragma: no cover - startup hardening
            logger.exception("Database bootstrap step failed (step: %s)", step_name)


_bootstrap_lock = threading.Lock()
_bootstrap_started = False


def trigger_db_bootstrap() -> None:
    global _bootstrap_started
    with _bootstrap_lock:
        if _bootstrap_started:
            return
        _bootstrap_started = True

    mode = str(os.getenv("DB_BOOTSTRAP_MODE", "background") or "background").strip().lower()
    if mode == "off":
        logger.info("DB bootstrap disabled (DB_BOOTSTRAP_MODE=off).")
        return
    if mode == "sync":
        logger.info("Running DB bootstrap synchronously.")
        run_db_bootstrap()
        return

    logger.info("Running DB bootstrap in background.")
    threading.Thread(target=run_db_bootstrap, daemon=True, name="db-bootstrap").start()


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(announcements.router)
app.include_router(assignments.router)
app.include_router(submissions.router)
app.include_router(calendar.router)
app.include_router(materials.router)
app.include_router(results.router)
app.include_router(chat.router)
app.include_router(notifications.router)
app.include_router(feedback.router)
app.include_router(progress.router)
app.include_router(admin.router)

@app.get("/")
def root():
    return {"status": "ok", "service": "campus-portal"}


@app.get("/health")
def healthcheck():
    return {"status": "ok"}


@app.get("/health/db")
def healthcheck_db():
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    return {"status": "ok"}


@app.on_event("startup")
def startup_event():
    trigger_db_bootstrap()
