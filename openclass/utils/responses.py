# openclass/utils/responses.py
"""Success envelope helpers."""
from typing import Any, Dict, Optional
from pydantic import BaseModel

from ..schemas.common import ErrorResponse


def serialize(value: Any) -> Any:
    """Dump pydantic models (or lists of them) with wire aliases."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    return value


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    response = {"success": True, "data": serialize(data)}
    if message:
        response["message"] = message
    return response


def error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """OpenAPI entries documenting the error envelope for the given statuses."""
    return {code: {"model": ErrorResponse} for code in status_codes}
