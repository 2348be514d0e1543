import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from payflow import models
from payflow.config import configure_logging, get_settings
from payflow.database import engine

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    models.Base.metadata.create_all(bind=engine)
    logger.info("%s v%s started (db=%s)", settings.APP_NAME, settings.APP_VERSION, settings.DATABASE_URL)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Records payments, routes them to automatic or manual verification, and issues receipts",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.get("/health")
def health_check():
    return {"status": "ok", "service": "payflow"}


from payflow.routers import admin, payments  # noqa: E402
app.include_router(payments.router, prefix="/api/v1", tags=["payments"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["admin"])
