"""
Purpose:
- POST /api/analyze-image: multipart upload (field "image") -> vision API -> prose description.
- Errors come back as {"error": "..."} with 400 (bad upload) or 500 (config / upstream).
"""

import logging
from io import BytesIO
from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from PIL import Image
from ..core.settings import settings
from ..core.telemetry import capture_exception
from ..vision.describer import generate_description
from ..vision.google_vision import VisionAPIError, VisionClient, VisionConfigError, get_vision_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analyze"])

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})

def _size_label(n_bytes: int) -> str:
    mb = 1024 * 1024
    if n_bytes >= mb and n_bytes % mb == 0:
        return f"{n_bytes // mb} MB"
    return f"{n_bytes} byte"

def _is_image(raw: bytes) -> bool:
    try:
        with Image.open(BytesIO(raw)) as img:
            img.verify()
        return True
    except Exception:
        return False

@router.post("/analyze-image")
def analyze_image(
    image: Optional[UploadFile] = File(default=None),
    client: VisionClient = Depends(get_vision_client),
):
    logger.info("Received image analysis request")
    if image is None:
        logger.info("No image file found in request")
        return _error(400, "No image file provided")

    limit = settings.max_upload_bytes
    raw = image.file.read(limit + 1)
    if len(raw) > limit:
        logger.info("Rejected %s: larger than %d bytes", image.filename, limit)
        return _error(400, f"Image exceeds the {_size_label(limit)} limit")
    if not raw or not _is_image(raw):
        logger.info("Rejected %s: not a decodable image", image.filename)
        return _error(400, "Uploaded file is not a valid image")

    logger.info("Image loaded (%d bytes), preparing to analyze", len(raw))
    try:
        response = client.annotate(raw)
    except VisionConfigError as e:
        logger.error("%s", e)
        return _error(500, "Server configuration error")
    except VisionAPIError as e:
        logger.error("Vision API error: %s", e)
        capture_exception(e)
        return _error(500, "Failed to analyze image")
    except Exception as e:
        logger.exception("Error processing image")
        capture_exception(e)
        return _error(500, "Failed to analyze image")

    description = generate_description(response, report_error=capture_exception)
    logger.info("Description generated: %s...", description[:100])
    return {"description": description, "detailedAnalysis": response}
