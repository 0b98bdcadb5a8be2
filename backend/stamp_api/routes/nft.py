from __future__ import annotations

import logging
import traceback

from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from ..config import settings
from ..schemas import ErrorResponse, HealthResponse, UploadRequest, UploadResponse
from ..services.storage_service import PinataLinker


logger = logging.getLogger(__name__)
router = APIRouter()


def get_linker() -> PinataLinker:
    return PinataLinker.from_settings(settings)


@router.get("/healthCheck", response_model=HealthResponse)
async def health_check():
    return HealthResponse()


@router.post("/upload", response_model=UploadResponse, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def upload_stamp(
    file: UploadFile | None = File(None),
    name: str | None = Form(None),
    description: str | None = Form(None),
    linker: PinataLinker = Depends(get_linker),
):
    file_bytes = await file.read() if file is not None else None
    logger.info(
        "upload received: file=%s size=%s name=%r",
        file.filename if file is not None else None,
        len(file_bytes) if file_bytes is not None else None,
        name,
    )

    # UploadValidationError is turned into a 400 by the app-level handler.
    upload = UploadRequest.from_form(file_bytes, name, description)

    try:
        metadata_url = await run_in_threadpool(
            linker.publish, upload.file_bytes, upload.name, upload.description
        )
    except Exception as exc:
        logger.exception("upload failed for %r", upload.name)
        body = ErrorResponse(message="Upload failed", error=str(exc) or "Unknown error")
        if settings.is_development:
            body.stack = traceback.format_exc()
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))

    logger.info("upload succeeded: %s", metadata_url)
    return UploadResponse(metadataURL=metadata_url)
