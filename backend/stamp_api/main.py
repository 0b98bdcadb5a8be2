from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .errors import UploadValidationError
from .logging_config import setup_logging
from .routes import nft
from .schemas import ErrorResponse, RootResponse


setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Stamp NFT API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.monotonic()
    response = await call_next(request)
    duration_ms = int((time.monotonic() - started) * 1000)
    logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, duration_ms)
    return response


@app.exception_handler(UploadValidationError)
async def upload_validation_handler(request: Request, exc: UploadValidationError):
    logger.warning("rejected %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content=ErrorResponse(message=str(exc)).model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content=ErrorResponse(message="Malformed request.").model_dump(exclude_none=True))


app.include_router(nft.router, prefix="/api", tags=["NFT"])


@app.get("/", response_model=RootResponse)
def read_root():
    return RootResponse()


def run() -> None:
    import uvicorn

    logger.info("Server listening on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
