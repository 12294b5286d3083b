"""FastAPI application — main entry point."""

import structlog
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import ensure_secret_key, get_settings
from app.infrastructure.database import engine, Base, SessionLocal
from app.core.logging import configure_logging
from app.core.middleware import setup_middleware
from app.core.exceptions import ConflictException, setup_exception_handlers

# Import all models so SQLAlchemy knows about them
from app.domain.models.user import User, UserRole
from app.domain.models.tour import Tour

# Import routers
from app.interfaces.api.auth import router as auth_router
from app.interfaces.api.users import router as users_router
from app.interfaces.api.tours import router as tours_router

settings = get_settings()
logger = structlog.get_logger(__name__)


def seed_admin() -> None:
    """Create the bootstrap admin account when one is configured."""
    if not (settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        return

    from app.application.services.auth_service import create_user
    from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

    db = SessionLocal()
    try:
        repo = SQLAlchemyUserRepository(db, User)
        if repo.find_by_email(settings.ADMIN_EMAIL):
            return
        create_user(repo, email=settings.ADMIN_EMAIL, password=settings.ADMIN_PASSWORD, name="Admin", role=UserRole.ADMIN)
        logger.info("Default admin user created")
    except ConflictException:
        # Exists but deactivated; leave it alone
        logger.warning("Configured admin account exists but is inactive")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    configure_logging()
    ensure_secret_key(settings)
    logger.info("Starting Tourbook API...", env=settings.ENVIRONMENT)

    # Create DB tables (dev only; use migrations in production)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    seed_admin()

    yield

    logger.info("Tourbook API stopped")


app = FastAPI(
    title="Tourbook",
    description="Tour booking API — accounts, sessions and tours",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)
setup_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(tours_router)


@app.get("/")
def root():
    return {
        "name": "Tourbook",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
