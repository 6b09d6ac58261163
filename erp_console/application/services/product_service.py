"""Product service: product image encoding."""

import asyncio
import base64
from typing import Optional

import structlog

from erp_console.core.exceptions import ValidationException

logger = structlog.get_logger(__name__)

MAX_IMAGE_BYTES = 5 * 1024 * 1024


async def encode_image(content: bytes, content_type: Optional[str]) -> str:
    """Encode an uploaded image as a ``data:`` URL suitable for ``imageUrl``."""
    if not content:
        raise ValidationException("Empty image file")
    if not content_type or not content_type.startswith("image/"):
        raise ValidationException("File is not an image", {"content_type": content_type})
    if len(content) > MAX_IMAGE_BYTES:
        raise ValidationException("Image too large", {"size": len(content), "max_size": MAX_IMAGE_BYTES})

    encoded = await asyncio.to_thread(base64.b64encode, content)
    logger.info("image_encoded", content_type=content_type, size=len(content))
    return f"data:{content_type};base64,{encoded.decode('ascii')}"
