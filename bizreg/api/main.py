"""FastAPI application"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..audit import AuditMiddleware
from ..config import configure_logging
from ..database import init_db
from .routers import registration, fees


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    configure_logging()
    init_db()
    yield


app = FastAPI(
    title="Business Registration API",
    description="Incorporation intake: validation, fee estimate and submission",
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(AuditMiddleware)

app.include_router(
    registration.router,
    prefix="/api/v1/registrations",
    tags=["registrations"]
)

app.include_router(
    fees.router,
    prefix="/api/v1/fees",
    tags=["fees"]
)


@app.get("/")
async def root():
    return {
        "message": "Business Registration API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
