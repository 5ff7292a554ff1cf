"""
Pydantic schemas for the profile API.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class ProfileResponse(BaseModel):
    status: str
    error: Optional[str] = None
    profile: Optional[dict] = None


class HealthResponse(BaseModel):
    status: str
    views: dict[str, str]
