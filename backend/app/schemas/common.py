"""
Response envelope shared by every endpoint.
"""
from pydantic import BaseModel
from typing import Any, Generic, Optional, TypeVar

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope: {success, message, data?, error?}."""
    success: bool = True
    message: str = "Success"
    data: Optional[DataT] = None
    error: Optional[Any] = None
