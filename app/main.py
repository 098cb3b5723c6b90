import sys
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.api import api_router
from app.core.config import settings
from app.db.session import engine

logger = logging.getLogger(__name__)

logging.basicConfig(level=settings.LOG_LEVEL, handlers=[logging.StreamHandler(sys.stdout)])


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Serving photos from {settings.PHOTOS_DIRECTORY}")
    yield
    await engine.dispose()


class RootResponse(BaseModel):
    status: str
    project_name: str
    version: str
    documentation_url: str


app = FastAPI(title="Guided Recipes", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Database error"})


app.include_router(api_router, prefix="/api/v1")


@app.get("/", response_model=RootResponse, tags=["Root"])
def read_root():
    return {
        "status": "ok",
        "project_name": app.title,
        "version": app.version,
        "documentation_url": "/docs",
    }
