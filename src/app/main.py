# src/app/main.py
from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.app.config import settings
from src.app.logging_config import configure_logging
from src.app.routers.weather import router as weather_router

configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Ice Cream Recipes API",
    version="v1",
    description="API for managing ice cream recipes",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(weather_router)


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Ice Cream Recipes API is running!"


@app.get("/health")
def health():
    return {"ok": True}


def run() -> None:
    try:
        logger.info("Starting Ice Cream Recipes API")
        uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
    except SystemExit as exc:
        # uvicorn exits with a non-zero code when it cannot start (e.g. port in use)
        if exc.code not in (None, 0):
            logger.critical("API terminated unexpectedly", exc_info=True)
        raise
    except Exception:
        logger.critical("API terminated unexpectedly", exc_info=True)
        raise SystemExit(1)
    finally:
        logging.shutdown()


if __name__ == "__main__":
    run()
