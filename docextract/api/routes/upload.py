from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse

from docextract.api.schemas import UploadResponse
from docextract.core.config import Settings, get_settings
from docextract.core.exceptions import NoFileError
from docextract.ingestion.validators import validate_upload
from docextract.services.extraction_service import handle_upload

__all__: list[str] = [
    "router",
]

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["upload"])

DOCUMENT_PARAM: Optional[UploadFile] = File(
    None, description="A PDF, DOCX, TXT or ZIP document to extract text from."
)

SETTINGS_DEP: Settings = Depends(get_settings)

_ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"description": "No file, or file over the size limit."},
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: {"description": "Content type not accepted."},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Text extraction failed."},
}


@router.post(
    "/upload",
    summary="Extract plain text from an uploaded document or ZIP archive.",
    response_model=UploadResponse,
    response_model_exclude_none=True,
    responses=_ERROR_RESPONSES,
)
async def upload_document(
    document: Optional[UploadFile] = DOCUMENT_PARAM,
    settings: Settings = SETTINGS_DEP,
) -> JSONResponse:
    """
    Validate the upload at the boundary, then run the extraction pipeline.

    Size and content-type rejections happen here, before any extraction is
    attempted.  Extraction failures propagate as `DocumentExtractionError`
    and are rendered by the global exception handlers.
    """
    if document is None:
        logger.warning("upload_no_file_supplied")
        raise NoFileError("No file uploaded")

    size = validate_upload(document, settings=settings)
    logger.info(
        "upload_received",
        filename=document.filename,
        content_type=document.content_type,
        size_bytes=size,
    )

    result = await handle_upload(document, settings=settings)
    return JSONResponse(content=result.to_payload(), status_code=status.HTTP_200_OK)
