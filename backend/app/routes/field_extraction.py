"""
Field Extraction API Routes
===========================

Endpoints:
- POST /api/extract - Upload a PDF and extract its labeled form fields
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import JSONResponse

from app.config import Config
from app.models import ExtractResponse, ErrorResponse
from app.services.errors import ToolUnavailable, ExtractionFailed

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Field Extraction"])


# ============================================================================
# Pipeline Instance (Singleton)
# ============================================================================

_pipeline_instance = None


def get_pipeline():
    """Get or create the pipeline instance."""
    global _pipeline_instance

    if _pipeline_instance is None:
        from app.services.field_labels import FieldExtractionPipeline

        _pipeline_instance = FieldExtractionPipeline()
        logger.info("Initialized FieldExtractionPipeline singleton")

    return _pipeline_instance


def _save_upload(pdf_bytes: bytes) -> Path:
    upload_dir = Path(Config.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    upload_path = upload_dir / f"{uuid.uuid4().hex}.pdf"
    upload_path.write_bytes(pdf_bytes)
    return upload_path


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ============================================================================
# API Endpoints
# ============================================================================

@router.post(
    "/extract",
    response_model=ExtractResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    }
)
async def extract_fields(
    pdf: Optional[UploadFile] = File(None, description="PDF file to extract fields from")
):
    """
    Extract form fields and their inferred labels from an uploaded PDF.

    The PDF is dumped with pdftk, its text is extracted, and each field is
    matched against the text to find its caption.
    """
    if pdf is None:
        return _error(400, "No file uploaded")

    filename = pdf.filename or "upload.pdf"
    if pdf.content_type != 'application/pdf' and not filename.lower().endswith('.pdf'):
        return _error(400, "Only PDF files are allowed")

    pdf_bytes = await pdf.read()

    if len(pdf_bytes) == 0:
        return _error(400, "Empty file uploaded")

    if len(pdf_bytes) > Config.MAX_UPLOAD_MB * 1024 * 1024:
        return _error(400, f"File exceeds the {Config.MAX_UPLOAD_MB}MB upload limit")

    if not pdf_bytes.startswith(b'%PDF'):
        return _error(400, "Invalid PDF format")

    logger.info(f"Processing PDF: {filename} ({len(pdf_bytes)} bytes)")

    upload_path = _save_upload(pdf_bytes)
    try:
        result = get_pipeline().process_pdf(str(upload_path), filename=filename)
        return ExtractResponse(success=True, **result.to_dict())

    except ToolUnavailable as e:
        logger.error(f"Extraction error: {e}")
        return _error(503, str(e))
    except ExtractionFailed as e:
        logger.error(f"Extraction error: {e}")
        return _error(500, str(e) or "Failed to extract PDF fields")
    finally:
        try:
            os.unlink(upload_path)
        except OSError as e:
            logger.warning(f"Failed to remove upload {upload_path}: {e}")
