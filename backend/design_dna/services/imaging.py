"""
Design DNA Imaging Utilities
Handles upload intake, URL fetching and policy checks before extraction.
"""
from typing import Optional, Tuple

import requests
from fastapi import HTTPException, UploadFile

from design_dna.config import config


class ImageFetchError(Exception):
    """Remote image could not be retrieved."""


def _normalize_content_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";")[0].strip().lower()


def validate_upload(content_type: Optional[str], size: Optional[int]) -> None:
    """
    Enforce the MIME allow-list and the size limit.

    Args:
        content_type: Declared content type of the upload or response
        size: Payload size in bytes, if known

    Raises:
        HTTPException: 415 for unsupported types, 413 for oversized payloads
    """
    if not config.validate_mime_type(_normalize_content_type(content_type)):
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported media type. Supported: {', '.join(config.SUPPORTED_MIME_TYPES)}"
        )

    if size is not None and size > config.max_file_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {config.MAX_FILE_MB}MB"
        )


async def read_upload(file: UploadFile) -> bytes:
    """
    Read an uploaded image after checking its declared type and size.

    Raises:
        HTTPException: 400 for read failures or empty files, 413/415 for policy violations
    """
    validate_upload(file.content_type, getattr(file, "size", None))

    try:
        file_bytes = await file.read()
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Failed to read file: {str(e)}")

    if not file_bytes:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")

    validate_upload(file.content_type, len(file_bytes))
    return file_bytes


def fetch_image(url: str, timeout: Optional[float] = None) -> Tuple[bytes, str]:
    """
    Download an image by URL.

    Returns:
        Tuple of (image_bytes, content_type)

    Raises:
        ImageFetchError: On transport errors or non-2xx responses
        HTTPException: 413/415 when the response violates upload policy
    """
    try:
        response = requests.get(url, timeout=timeout or config.FETCH_TIMEOUT_S)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ImageFetchError(f"Could not fetch image from {url}: {e}") from e

    content_type = _normalize_content_type(response.headers.get("content-type")) or "image/jpeg"
    validate_upload(content_type, len(response.content))
    return response.content, content_type
