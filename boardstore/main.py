import os
import sys
import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from boardstore.api.routes import boards, system, transfer
from boardstore.core.boards import open_store
from boardstore.core.config import ENV, LOG_LEVEL
from boardstore.core.exceptions import (
    BoardNotFoundError,
    BoardStoreError,
    MalformedInputError,
    StorageError,
)

# Load logging config if present
if os.path.exists("logging.conf"):
    logging.config.fileConfig("logging.conf", disable_existing_loggers=False)
else:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
logger = logging.getLogger("boardstore")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables and run the legacy import once, up front
    with open_store() as store:
        logger.info(f"Board store ready at {store.boards_dir}")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="Boardstore API",
    version="1.0",
    lifespan=lifespan,
)

# Dev-only CORS settings
if ENV == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:1420",
            "http://127.0.0.1:1420",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS allowed for development environment")

app.include_router(boards.router)
app.include_router(transfer.router)
app.include_router(system.router)


@app.exception_handler(BoardStoreError)
async def board_store_error_handler(request: Request, exc: BoardStoreError):
    if isinstance(exc, BoardNotFoundError):
        status_code = 404
    elif isinstance(exc, MalformedInputError):
        status_code = 400
    else:
        status_code = 500
    if isinstance(exc, StorageError):
        logger.error(f"Storage failure on {request.url.path}: {exc}")
    return JSONResponse(content={"detail": str(exc)}, status_code=status_code)


@app.api_route("/api/health", methods=["GET", "HEAD"])
def health():
    status = {"api": "ok", "database": None}
    http_status = 200

    try:
        with open_store() as store:
            with store.transaction() as db:
                db.execute(text("SELECT 1"))
        status["database"] = "connected"
    except Exception as e:
        status["database"] = f"error: {e}"
        http_status = 503

    return JSONResponse(content=status, status_code=http_status)
