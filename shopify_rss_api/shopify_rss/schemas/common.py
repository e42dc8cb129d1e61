"""
Common schemas.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "OK"
    timestamp: str
    service: str


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    message: str


class ProductCountResponse(BaseModel):
    """Active product count response."""
    count: int
    message: str
