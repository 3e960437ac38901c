import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.admin.router import router as admin_router
from app.auth.router import router as auth_router
from app.config import settings
from app.db import Database
from app.errors import register_error_handlers
from app.questions.router import router as questions_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(db: Database | None = None) -> FastAPI:
    """Build the API around a store; defaults to the configured database."""
    db = db or Database.from_url(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db.init()
        logger.info("Soliton admin API started")
        yield
        db.dispose()
        logger.info("Soliton admin API stopped")

    app = FastAPI(title="Soliton Admin", version="0.1.0", lifespan=lifespan)
    app.state.db = db
    register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(questions_router)
    return app


app = create_app()
