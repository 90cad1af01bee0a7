import os
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config.database import engine, Base, SessionLocal
from config.settings import settings
from helpers.errors import register_exception_handlers
from helpers.logging_helper import configure_logging
from api.admin.admin_service import DatabaseAdminStore, seed_default_admin
from api.garbage_reports.garbage_reports_routes import router as reports_router
from api.admin.admin_routes import router as admin_router
from api.uploads.uploads_routes import router as uploads_router
from utils.deps import memory_admin_store

logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)


def seed_admin() -> None:
    """Make sure the well-known admin exists in the configured store."""
    if settings.use_memory_storage:
        seed_default_admin(memory_admin_store, settings.DEFAULT_ADMIN_EMAIL, settings.DEFAULT_ADMIN_PASSWORD)
        return
    db = SessionLocal()
    try:
        seed_default_admin(DatabaseAdminStore(db), settings.DEFAULT_ADMIN_EMAIL, settings.DEFAULT_ADMIN_PASSWORD)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    seed_admin()
    logger.info("%s started (storage=%s)", settings.APP_NAME, settings.STORAGE_BACKEND)
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
register_exception_handlers(app)

# CORS: use our parsed list
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["Authorization", "Content-Type"],
)

app.include_router(reports_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
# image files are served outside /api
app.include_router(uploads_router)

@app.get("/health")
def health_check():
    return {"status": "ok"}

@app.get("/")
def home():
    return {"message": f"Welcome to {settings.APP_NAME}"}

if __name__ == "__main__":
    import uvicorn
    port = int(os.environ.get("PORT", settings.PORT))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=settings.DEBUG)
