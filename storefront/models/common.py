"""Shared response models"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint"""
    error: str


class HealthResponse(BaseModel):
    status: str
    service: str
    database: str
