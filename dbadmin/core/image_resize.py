"""
Scale stored images to fit a bounding box and re-encode them.
"""

import asyncio
import logging
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from PIL import Image, UnidentifiedImageError

from .config import settings
from .errors import ImageDecodeError, InvalidResizeBounds, ResizeTimeout

logger = logging.getLogger(__name__)

RESIZE_FORMATS = {"jpeg": "JPEG", "png": "PNG"}


@dataclass(frozen=True)
class ImageGeometry:
    src_width: int
    src_height: int
    dest_width: int
    dest_height: int


def compute_geometry(
    src_width: int,
    src_height: int,
    new_width: Optional[int],
    new_height: Optional[int],
) -> ImageGeometry:
    """
    Fit the source inside new_width x new_height keeping its aspect ratio.

    The side with the larger source/bound ratio is pinned to its bound and
    the other one is scaled by the same ratio. Fractional sizes are
    truncated, never below 1px.
    """
    if new_width is None or new_height is None or new_width <= 0 or new_height <= 0:
        raise InvalidResizeBounds("newWidth and newHeight must be positive integers")

    ratio_width = src_width / new_width
    ratio_height = src_height / new_height

    if ratio_width < ratio_height:
        dest_width = src_width / ratio_height
        dest_height = new_height
    else:
        dest_width = new_width
        dest_height = src_height / ratio_width

    return ImageGeometry(
        src_width=src_width,
        src_height=src_height,
        dest_width=max(1, int(dest_width)),
        dest_height=max(1, int(dest_height)),
    )


def resize_image(
    data: bytes,
    new_width: Optional[int],
    new_height: Optional[int],
    fmt: Optional[str],
) -> bytes:
    """
    Decode `data`, fit it into the bounds and encode it as `fmt`.

    `fmt` is "jpeg" or "png"; any other value still decodes and checks the
    image but produces no output.
    """
    try:
        src = Image.open(BytesIO(data))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        raise ImageDecodeError("Unable to decode image") from exc

    with src:
        try:
            src.load()
        except (Image.DecompressionBombError, OSError, ValueError) as exc:
            raise ImageDecodeError("Unable to decode image") from exc

        geometry = compute_geometry(src.width, src.height, new_width, new_height)
        encoder = RESIZE_FORMATS.get(fmt or "")
        if encoder is None:
            logger.info("[resize] unsupported format %r, nothing encoded", fmt)
            return b""

        with src.convert("RGB") as rgb, rgb.resize(
            (geometry.dest_width, geometry.dest_height),
            Image.Resampling.BILINEAR,
        ) as dest:
            buffer = BytesIO()
            if encoder == "JPEG":
                dest.save(buffer, format=encoder, quality=settings.JPEG_QUALITY)
            else:
                dest.save(buffer, format=encoder)

    logger.info(
        "[resize] %sx%s -> %sx%s %s",
        geometry.src_width, geometry.src_height,
        geometry.dest_width, geometry.dest_height, fmt,
    )
    return buffer.getvalue()


async def resize_image_async(
    data: bytes,
    new_width: Optional[int],
    new_height: Optional[int],
    fmt: Optional[str],
    timeout: Optional[float] = None,
) -> bytes:
    """Run resize_image in a worker thread, bounded by the resize timeout."""
    timeout = settings.RESIZE_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(resize_image, data, new_width, new_height, fmt),
            timeout=timeout,
        )
    except asyncio.TimeoutError as exc:
        logger.warning("[resize] gave up after %ss", timeout)
        raise ResizeTimeout("Image processing timed out") from exc
