"""Envelope shapes shared by every endpoint: {"success": ..., ...}."""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    success: bool = True


class MessageResponse(SuccessResponse):
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
