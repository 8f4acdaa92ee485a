import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mortgage_engine.config import settings
from mortgage_engine.api.routes import health, loans, tax

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)

app = FastAPI(title=settings.APP_TITLE, version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api")
app.include_router(loans.router, prefix="/api")
app.include_router(tax.router, prefix="/api")
