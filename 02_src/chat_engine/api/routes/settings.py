"""Engine status and settings routes."""

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from ...app import Application


class StatusResponse(BaseModel):
    """Response model for engine status."""

    loading: bool
    snapshot_loaded: bool
    team_name: str
    player_count: int
    transcript_length: int
    remote_enabled: bool
    confidence_threshold: float
    auto_analysis_enabled: bool


class SettingsRequest(BaseModel):
    """Only the given fields are changed."""

    confidence_threshold: float | None = Field(None, ge=0, le=100)
    auto_analysis_enabled: bool | None = None


def create_settings_router(app: Application) -> APIRouter:
    """Create status/settings router."""
    router = APIRouter(prefix="/api", tags=["settings"])

    @router.get("/status", response_model=StatusResponse)
    async def get_status() -> dict:
        try:
            return app.status()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.put("/settings", response_model=StatusResponse)
    async def update_settings(request: SettingsRequest) -> dict:
        try:
            if request.confidence_threshold is not None:
                app.set_confidence_threshold(request.confidence_threshold)
            if request.auto_analysis_enabled is not None:
                app.set_auto_analysis_enabled(request.auto_analysis_enabled)
            return app.status()
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
