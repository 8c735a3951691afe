"""
Image generation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bigmodel_python.client.core import require_request
from bigmodel_python.client.options import IMAGE_GENERATIONS_PATH
from bigmodel_python.telemetry import get_logger
from bigmodel_python.types.image import ImageResponse

if TYPE_CHECKING:
    from bigmodel_python.client import Client
    from bigmodel_python.types.image import ImageRequest

logger = get_logger(__name__)


async def generate_image(
    client: Client,
    request: ImageRequest,
    *,
    timeout: float | None = None,
) -> ImageResponse:
    """Generate images from a text prompt.

    Example:
        >>> result = await generate_image(client, ImageRequest(model="cogview-4", prompt="..."))
        >>> print(result.urls[0])

    Raises:
        InvalidRequestError: If request is None
        TransportError: If the request failed or the server returned an error status
        DecodeError: If the body holds no images
    """
    require_request(request, "image generation")
    response = await client.send(
        "POST",
        client.resolve_path(IMAGE_GENERATIONS_PATH),
        ImageResponse,
        body=request,
        timeout=timeout,
    )
    logger.debug("Images generated", count=len(response.data))
    return response
