"""Health check endpoint.

The engine has no database or cache; it is healthy once the rate card is
loaded, so the check reports which card is in service.
"""

from datetime import datetime, timezone

from beartype import beartype
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ... import __version__
from ...core.config import Settings
from ...services.quote_engine import QuoteEngine
from ..dependencies import get_app_settings, get_engine

router = APIRouter()

# Track application start time
APP_START_TIME = datetime.now(timezone.utc)


class RateCardStatus(BaseModel):
    """Rate card currently used for quoting."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    jurisdiction: str
    carrier: str
    effective_year: int = Field(..., ge=2000)


class HealthResponse(BaseModel):
    """Overall service health response."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    status: str = Field(..., pattern=r"^(healthy|unhealthy|degraded)$")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    rate_card: RateCardStatus
    uptime_seconds: float = Field(
        ..., ge=0, description="Application uptime in seconds"
    )


@router.get("/health", response_model=HealthResponse)
@beartype
async def health_check(
    settings: Settings = Depends(get_app_settings),
    engine: QuoteEngine = Depends(get_engine),
) -> HealthResponse:
    """Report service status and the rate card in service."""
    now = datetime.now(timezone.utc)
    card = engine.rate_card
    return HealthResponse(
        status="healthy",
        timestamp=now,
        version=__version__,
        environment=settings.api_env,
        rate_card=RateCardStatus(
            jurisdiction=card.jurisdiction,
            carrier=card.carrier,
            effective_year=card.effective_year,
        ),
        uptime_seconds=max(0.0, (now - APP_START_TIME).total_seconds()),
    )
