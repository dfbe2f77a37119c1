"""Messaging API routes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from ...app import Application


class MessageRequest(BaseModel):
    """Request model for sending a message."""

    text: str = Field(max_length=4000)


class AttachmentResponse(BaseModel):
    id: str
    name: str
    media_kind: str
    size_bytes: int
    location_ref: str


class MessageResponse(BaseModel):
    """Response model for a transcript message."""

    id: str
    sender: str
    content: str
    timestamp: datetime
    kind: str
    confidence: float | None = None
    priority: str | None = None
    attachments: list[AttachmentResponse] = []
    suggestions: list[str] = []
    follow_up_questions: list[str] = []
    metadata: dict[str, Any] = {}


class SubmitResponse(BaseModel):
    """Engine answer; message is null when a newer submission superseded it."""

    message: MessageResponse | None
    superseded: bool


def create_messaging_router(app: Application) -> APIRouter:
    """Create messaging router."""
    router = APIRouter(prefix="/api", tags=["messaging"])

    @router.post("/messages", response_model=SubmitResponse)
    async def send_message(request: MessageRequest) -> dict:
        """Submit user text to the engine."""
        try:
            message = await app.submit(request.text)
            return {
                "message": message.to_dict() if message else None,
                "superseded": message is None,
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/transcript", response_model=list[MessageResponse])
    async def get_transcript() -> list[dict]:
        """All messages in append order."""
        try:
            return [m.to_dict() for m in app.transcript.messages]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
