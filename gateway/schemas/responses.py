# gateway/schemas/responses.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    error: str
    missing: Optional[List[str]] = None
    details: Optional[str] = None
