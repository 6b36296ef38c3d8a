"""
Transformation wrapper endpoint.

Streams one column value of a row, optionally as a resized image.
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Request, Response

from ..core.errors import TransformationError
from ..core.headers import download_headers, send_default_headers
from ..core.image_resize import resize_image_async
from ..schemas.transformation import TransformationParams
from ..services.transformation_wrapper import load_stored_value, render_value

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transformation", tags=["transformation"])


@router.get("/wrapper")
async def transformation_wrapper(request: Request) -> Response:
    """
    Send a stored column value with its transformation content type.

    Query parameters: db, table, transformKey, whereClause, cn, ct,
    sqlQuery, resize (jpeg|png), newWidth, newHeight.
    """
    params = TransformationParams.from_query(request.query_params)

    try:
        stored = await asyncio.to_thread(load_stored_value, params)
        if stored is None:
            return Response()

        headers = send_default_headers()
        headers.update(download_headers(params.cn, stored.mime_type))

        if not params.wants_resize:
            body = render_value(stored.value, stored.mime_type)
        else:
            # Set by the inline image transformations when resizing is possible
            body = await resize_image_async(
                stored.value, params.new_width, params.new_height, params.resize
            )
    except TransformationError as exc:
        logger.warning("[transformation] %s (%s)", exc.detail, exc.status_code)
        raise HTTPException(status_code=exc.status_code, detail=exc.detail)

    return Response(content=body, headers=headers)
