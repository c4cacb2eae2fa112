from typing import Any, Dict, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.platform.utils.timestamps import now_utc, to_iso_utc


def api_response(
    *,
    data: Optional[Any] = None,
    message: str = "Operation successful",
    status_code: int = status.HTTP_200_OK,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Single source of truth for ALL API responses.
    Sets success = True if status_code < 400. The "data" key is omitted
    when there is nothing to return.
    """
    content = {
        "success": status_code < 400,
        "message": message,
        "timestamp": to_iso_utc(now_utc()),
    }
    if data is not None:
        content["data"] = jsonable_encoder(data)

    return JSONResponse(status_code=status_code, content=content, headers=headers)
