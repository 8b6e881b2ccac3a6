import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from core.config_loader import settings
from core.database import Base, SessionLocal, engine
from core.errors import register_exception_handlers
from core.logging_config import configure_logging

from auth.routes.auth_router import auth_router
from auth.services.auth_service import SessionIssuer
from user.router import user_router
from user.service import ensure_admin_user
from project.router import project_router
from meeting.router import meeting_router
from comment.router import comment_router
from assignment.router import assignment_router
from task.router import task_router
from announcement.router import announcement_router
from requisition.router import requisition_router
from note.router import note_router
from reminder.router import reminder_router
from employeeprofile.router import profile_router
import models_bootstrap  # noqa: F401

logger = logging.getLogger(__name__)

openapi_tags = [
    {
        "name": "Auth",
        "description": "Login, registration and the current user",
    },
    {
        "name": "Users",
        "description": "Admin user management",
    },
    {
        "name": "Health Checks",
        "description": "Application health checks",
    }
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        with SessionLocal() as db:
            ensure_admin_user(
                db,
                email=settings.ADMIN_EMAIL,
                password=settings.ADMIN_PASSWORD,
                name=settings.ADMIN_NAME,
            )
    logger.info("employee portal started")
    yield


app = FastAPI(title="Employee Portal API", openapi_tags=openapi_tags, lifespan=lifespan)
app.state.session_issuer = SessionIssuer.from_settings(settings)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            str(origin).strip("/") for origin in settings.BACKEND_CORS_ORIGINS
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(project_router, prefix="/api")
app.include_router(meeting_router, prefix="/api")
app.include_router(comment_router, prefix="/api")
app.include_router(assignment_router, prefix="/api")
app.include_router(task_router, prefix="/api")
app.include_router(announcement_router, prefix="/api")
app.include_router(requisition_router, prefix="/api")
app.include_router(note_router, prefix="/api")
app.include_router(reminder_router, prefix="/api")
app.include_router(profile_router, prefix="/api")


@app.get("/health", tags=['Health Checks'])
def read_root():
    return {"health": "true"}
