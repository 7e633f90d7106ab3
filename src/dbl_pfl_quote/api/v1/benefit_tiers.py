"""Benefit tier display text endpoints."""

from beartype import beartype
from fastapi import APIRouter, Depends

from ...models.quote import BenefitTier
from ...schemas.quote import BenefitTierResponse
from ...services.formatting import describe_benefit_tier
from ...services.quote_engine import QuoteEngine
from ...services.rating.rate_tables import RateTable
from ..dependencies import get_engine

router = APIRouter(prefix="/benefit-tiers", tags=["benefit-tiers"])


@router.get("", response_model=list[BenefitTierResponse])
@beartype
async def list_benefit_tiers(
    engine: QuoteEngine = Depends(get_engine),
) -> list[BenefitTierResponse]:
    """All tiers in ascending order of benefit richness."""
    return [
        BenefitTierResponse(
            tier=tier, details=describe_benefit_tier(tier, engine.rate_card)
        )
        for tier in BenefitTier
    ]


@router.get("/{tier}", response_model=BenefitTierResponse)
@beartype
async def get_benefit_tier(
    tier: str,
    engine: QuoteEngine = Depends(get_engine),
) -> BenefitTierResponse:
    """Display text for one tier; unknown codes describe the statutory tier."""
    resolved = RateTable(engine.rate_card).resolve_tier(tier)
    return BenefitTierResponse(
        tier=resolved,
        details=describe_benefit_tier(tier, engine.rate_card),
    )
