# src/app/main.py
from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from src.app.deps import build_food_safety_service, load_settings
from src.app.domain.errors import MissingParameterError, StoreConfigurationError, StoreError
from src.app.routers.safety import router as safety_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong"
GENERIC_ERROR_MESSAGE = "Please try again later or consult a vet."


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "food_safety_service", None) is None:
        try:
            settings = load_settings()
            logging.getLogger().setLevel(settings.LOG_LEVEL)
            service = build_food_safety_service(settings)
        except StoreConfigurationError as error:
            logger.error("Cannot start without a store: %s", error)
            raise
        app.state.food_safety_service = service
        logger.info(
            "PetPal API ready: env=%s, table=%s, gemini=%s",
            settings.APP_ENV,
            settings.FOODS_TABLE,
            "configured" if service.classifier.enabled else "missing",
        )
    yield
    logger.info("Shutting down PetPal API")


app = FastAPI(title="PetPal Food Safety API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(safety_router)


@app.exception_handler(MissingParameterError)
async def missing_parameter_handler(request: Request, exc: MissingParameterError):
    content = {"error": exc.message}
    if exc.example:
        content["example"] = exc.example
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store failure on %s (%s): %s", request.url.path, exc.operation, exc.reason)
    return JSONResponse(
        status_code=500,
        content={"error": GENERIC_ERROR, "message": GENERIC_ERROR_MESSAGE},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unexpected error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": GENERIC_ERROR, "message": GENERIC_ERROR_MESSAGE},
    )


@app.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Welcome to PetPal API - Check if food is safe for your pet!"


@app.get("/health")
def health():
    return {"ok": True}
