"""API response envelope."""

from typing import Any, Optional

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Envelope shared by every /api/v1 endpoint."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    message: Optional[str] = None
